"""
CLI commands for the full bootstrap and the interactive menu.

Thin wrappers over ``hookstrap.core.use_cases.bootstrap``.
"""

from __future__ import annotations

import json
import sys

import click

from hookstrap.core.models.profile import ProfileName
from hookstrap.ui.cli.common import (
    PROFILE_CHOICE,
    echo_receipts,
    load_settings_or_exit,
    resolve_root,
)

BANNER = r"""
  _                 _       _
 | |__   ___   ___ | | _____| |_ _ __ __ _ _ __
 | '_ \ / _ \ / _ \| |/ / __| __| '__/ _` | '_ \
 | | | | (_) | (_) |   <\__ \ |_| | | (_| | |_) |
 |_| |_|\___/ \___/|_|\_\___/\__|_|  \__,_| .__/
                                          |_|
"""

_MENU = [p.value for p in ProfileName]
_EXIT_CHOICE = str(len(_MENU) + 1)

_STEP_LABELS = {
    "dependencies": "Dependencies",
    "commitlint": "Commit-message linter",
    "version_manager": "Version manager",
    "tools": "Tools",
    "config": "Config files",
    "hooks_install": "Git hooks",
    "hooks_run": "Checks",
}


def _interactive_prompts():
    from hookstrap.core.use_cases.bootstrap import BootstrapOptions

    return BootstrapOptions(
        confirm=lambda tool: click.confirm(f"Do you want to install {tool}?", default=False),
        ask_version=lambda tool: click.prompt(
            f"Enter the {tool} version to install", default="latest"
        ),
        retry=lambda tool: click.confirm(f"Try a different version of {tool}?", default=False),
    )


@click.command()
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--root", "-C", default=None, help="Repository root (default: cwd).")
@click.option("--no-tools", is_flag=True, help="Skip version manager and tool installs.")
@click.option("--no-checks", is_flag=True, help="Install hooks but don't run the checks.")
@click.option("--no-prompt", is_flag=True, help="Don't offer optional tools.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bootstrap(
    ctx: click.Context,
    profile: str,
    root: str | None,
    no_tools: bool,
    no_checks: bool,
    no_prompt: bool,
    as_json: bool,
) -> None:
    """Run the full pipeline for PROFILE.

    Examples:

        hookstrap bootstrap python

        hookstrap bootstrap terraform --no-checks

        hookstrap bootstrap golang --no-tools --json
    """
    from hookstrap.core.use_cases.bootstrap import BootstrapOptions, run_bootstrap

    settings = load_settings_or_exit(ctx)
    options = BootstrapOptions() if (no_prompt or as_json) else _interactive_prompts()
    options.install_tools = not no_tools
    options.run_checks = not no_checks

    result = run_bootstrap(profile, settings=settings, root=resolve_root(root), options=options)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    _print_summary(ctx, result)
    sys.exit(result.exit_code)


def _print_summary(ctx: click.Context, result) -> None:
    verbose = ctx.obj.get("verbose", False)
    report = result.report

    if report is None:
        click.secho(f"❌ {result.error}", fg="red")
        return

    click.secho(f"\n📋 {result.profile.name.value} — {result.root}", fg="cyan", bold=True)
    for step, receipts in report.step_receipts.items():
        click.secho(f"\n   {_STEP_LABELS.get(step, step)}", fg="white", bold=True)
        echo_receipts(receipts, verbose=verbose)

    click.echo()
    if result.missing:
        click.secho("❌ Missing required dependencies:", fg="red", bold=True)
        for name in result.missing:
            click.echo(f"   • {name}")
        click.echo("   Install them and re-run hookstrap.")
    elif result.halted:
        click.secho(f"❌ {result.error}", fg="red", bold=True)
    elif result.failed_checks:
        click.secho(
            f"❌ {len(result.failed_checks)} check(s) failed: {', '.join(result.failed_checks)}",
            fg="red",
            bold=True,
        )
        click.echo("   Fix the issues above and run: hookstrap hooks run " + result.profile.name.value)
    else:
        click.secho("✅ Pre-commit setup complete", fg="green", bold=True)

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for receipt in result.warnings:
            click.echo(f"   • {receipt.target}: {receipt.error}")
    click.echo()


# ── Interactive menu ────────────────────────────────────────────


def run_menu(ctx: click.Context) -> None:
    """Banner, OS check and the numbered profile menu."""
    from hookstrap.core.services.toolchain import detect_os

    click.secho(BANNER, fg="cyan")

    os_name = detect_os()
    if os_name is None:
        click.secho("❌ Unsupported operating system. Only Linux and macOS are supported.", fg="red")
        sys.exit(1)
    click.echo(f"Detected OS: {os_name}\n")

    click.secho("Select the pre-commit profile to set up:", bold=True)
    for index, name in enumerate(_MENU, start=1):
        click.echo(f"  [{index}] {name.capitalize()}")
    click.echo(f"  [{_EXIT_CHOICE}] Exit")

    while True:
        choice = click.prompt("Enter your choice", type=str).strip()
        if choice == _EXIT_CHOICE:
            click.echo("Exiting...")
            sys.exit(0)
        if choice.isdigit() and 1 <= int(choice) <= len(_MENU):
            break
        click.secho("Invalid choice. Please try again.", fg="yellow")

    profile = _MENU[int(choice) - 1]
    try:
        ctx.invoke(bootstrap, profile=profile)
    finally:
        click.echo("Pre-commit hooks installation process completed.")
