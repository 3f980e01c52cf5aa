"""
CLI commands for git hooks: install, run, template registration.

Thin wrappers over ``hookstrap.core.services.hooks``.
"""

from __future__ import annotations

import json
import sys

import click

from hookstrap.ui.cli.common import (
    PROFILE_CHOICE,
    echo_receipts,
    load_settings_or_exit,
    resolve_root,
)


@click.group()
def hooks() -> None:
    """Git hooks — install the runner, run checks, register templates."""


@hooks.command("install")
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--root", "-C", default=None, help="Repository root (default: cwd).")
@click.pass_context
def install(ctx: click.Context, profile: str, root: str | None) -> None:
    """Register the hook runner's git hooks for PROFILE."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.hooks import install_hooks

    settings = load_settings_or_exit(ctx)
    receipts = install_hooks(get_registry().profile(profile), resolve_root(root), settings.hook_runner)

    echo_receipts(receipts, verbose=ctx.obj.get("verbose", False))
    if any(r.failed for r in receipts):
        sys.exit(1)
    click.secho("✅ Hooks installed", fg="green")


@hooks.command("run")
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--root", "-C", default=None, help="Repository root (default: cwd).")
@click.option("--check", "checks", multiple=True, help="Run only these hook ids.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    profile: str,
    root: str | None,
    checks: tuple[str, ...],
    as_json: bool,
) -> None:
    """Run PROFILE's checks against all files, each one independently."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.hooks import run_checks

    settings = load_settings_or_exit(ctx)
    receipts = run_checks(
        get_registry().profile(profile),
        resolve_root(root),
        settings.hook_runner,
        checks=list(checks) if checks else None,
    )
    failed = [r.target for r in receipts if r.failed]

    if as_json:
        click.echo(json.dumps({
            "failed": failed,
            "receipts": [r.model_dump(mode="json") for r in receipts],
        }, indent=2))
        sys.exit(1 if failed else 0)

    click.secho(f"\n🔍 Checks — {profile}", fg="cyan", bold=True)
    echo_receipts(receipts)
    click.echo()
    if failed:
        click.secho(f"❌ {len(failed)} check(s) failed: {', '.join(failed)}", fg="red", bold=True)
        sys.exit(1)
    click.secho("✅ All checks passed", fg="green", bold=True)


@hooks.command("templates")
@click.pass_context
def templates(ctx: click.Context) -> None:
    """Install default hooks for new repositories (git init.templateDir)."""
    from hookstrap.core.services.hooks import register_git_templates

    settings = load_settings_or_exit(ctx)
    receipts = register_git_templates(settings.git_template_path)
    echo_receipts(receipts)
    if any(r.failed for r in receipts):
        sys.exit(1)
    click.secho(
        f"✅ Git hooks set up in {settings.git_template_path} (applies to new clones and git init)",
        fg="green",
    )
