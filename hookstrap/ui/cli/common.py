"""
Helpers shared by the CLI command groups.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ProfileName
from hookstrap.core.models.settings import Settings

PROFILE_CHOICE = click.Choice([p.value for p in ProfileName], case_sensitive=False)

_STATUS_STYLE = {
    "ok": ("✓", "green"),
    "skipped": ("⊘", "yellow"),
    "failed": ("✗", "red"),
}


def load_settings_or_exit(ctx: click.Context) -> Settings:
    """Load settings for this invocation, exiting 1 on a broken file."""
    from hookstrap.core.config.loader import ConfigError, load_settings

    cached = ctx.obj.get("settings")
    if cached is not None:
        return cached
    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    ctx.obj["settings"] = settings
    return settings


def resolve_root(root: str | None) -> Path:
    return Path(root).resolve() if root else Path.cwd()


def echo_receipts(receipts: list[Receipt], verbose: bool = False) -> None:
    """One line per receipt, with the error (or output when verbose) below it."""
    for receipt in receipts:
        icon, color = _STATUS_STYLE.get(receipt.status, ("•", "white"))
        click.secho(f"   {icon} {receipt.target}", fg=color, nl=False)
        if receipt.skipped and receipt.output:
            click.echo(f" ({receipt.output})")
        else:
            timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
            click.echo(timing)
        if receipt.failed and receipt.error:
            for line in receipt.error.split("\n")[:5]:
                click.echo(f"     │ {line}")
        elif verbose and receipt.ok and receipt.output:
            for line in receipt.output.split("\n")[:10]:
                click.echo(f"     │ {line}")
