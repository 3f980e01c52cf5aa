"""
CLI commands for the version manager and pinned tools.

Thin wrappers over ``hookstrap.core.services.toolchain``.
"""

from __future__ import annotations

import json
import sys

import click

from hookstrap.ui.cli.common import PROFILE_CHOICE, echo_receipts, load_settings_or_exit


@click.group()
def tools() -> None:
    """Toolchains — version manager setup, installs, ledger."""


@tools.command("setup")
@click.argument("profile", type=PROFILE_CHOICE)
@click.pass_context
def setup(ctx: click.Context, profile: str) -> None:
    """Install (or reinstall) the version manager for PROFILE."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.toolchain import bootstrap_version_manager

    settings = load_settings_or_exit(ctx)
    config = get_registry().profile(profile)
    receipt = bootstrap_version_manager(settings, config.version_manager)

    if receipt.failed:
        click.secho(f"❌ {receipt.error}", fg="red")
        sys.exit(1)

    click.secho(f"✅ asdf ready ({receipt.output})", fg="green")
    if receipt.metadata.get("block_added"):
        click.echo(f"   Activation added to {receipt.metadata['startup_file']}")


@tools.command("install")
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, profile: str, as_json: bool) -> None:
    """Install the mandatory tools of PROFILE (asdf must already be set up)."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.toolchain import ToolInstaller, asdf_cli_for
    from hookstrap.core.use_cases.bootstrap import resolve_tools

    settings = load_settings_or_exit(ctx)
    registry = get_registry()
    config = registry.profile(profile)

    installer = ToolInstaller(
        cli=asdf_cli_for(settings.version_manager.variant or config.version_manager),
        ledger_path=settings.ledger_file,
        plugin_sources={**registry.plugin_sources, **settings.plugin_sources},
    )
    receipts = installer.install_batch(resolve_tools(config, settings))

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in receipts], indent=2))
    else:
        click.secho(f"\n🔧 Tools — {profile}", fg="cyan", bold=True)
        echo_receipts(receipts, verbose=ctx.obj.get("verbose", False))
        click.echo()

    if any(r.failed for r in receipts):
        sys.exit(1)


@tools.command("ledger")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ledger(ctx: click.Context, as_json: bool) -> None:
    """Show the installed-version ledger (installation summary)."""
    from hookstrap.core.persistence.tool_versions import LedgerError, read_ledger

    settings = load_settings_or_exit(ctx)
    try:
        entries = read_ledger(settings.ledger_file)
    except LedgerError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(entries, indent=2))
        return

    click.secho(f"\n📒 {settings.ledger_file}", fg="cyan", bold=True)
    if not entries:
        click.echo("   (empty)")
    width = max((len(k) for k in entries), default=0)
    for tool, version in entries.items():
        click.echo(f"   {tool.ljust(width)}  {version}")
    click.echo()
