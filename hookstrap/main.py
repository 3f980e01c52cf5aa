"""
hookstrap — CLI entrypoint.

Usage:
    hookstrap                      # interactive menu
    hookstrap bootstrap python
    hookstrap emit typescript
    python -m hookstrap.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from hookstrap import __version__
from hookstrap.core.observability.logging_config import setup_logging
from hookstrap.ui.cli.common import (
    PROFILE_CHOICE,
    echo_receipts,
    load_settings_or_exit,
    resolve_root,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hookstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to hookstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """hookstrap — bootstrap pre-commit hooks and pinned toolchains."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "WARNING"
    else:
        level = os.environ.get("HOOKSTRAP_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("HOOKSTRAP_LOG_FILE"),
        log_file_level=os.environ.get("HOOKSTRAP_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        from hookstrap.ui.cli.bootstrap import run_menu

        run_menu(ctx)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def profiles(as_json: bool) -> None:
    """List the available profiles."""
    from hookstrap.core.data import get_registry

    registry = get_registry()

    if as_json:
        click.echo(json.dumps(
            {name: p.model_dump(mode="json") for name, p in registry.profiles.items()},
            indent=2,
        ))
        return

    click.secho("\n📦 Profiles", fg="cyan", bold=True)
    for name, profile in registry.profiles.items():
        click.secho(f"   • {name}", fg="white", bold=True, nl=False)
        click.echo(f"  {profile.description}")
        click.echo(f"       requires: {', '.join(profile.requires) or '—'}")
        tools = ", ".join(f"{t.name} {t.version}" for t in profile.tools)
        click.echo(f"       tools:    {tools or '—'}")
        click.echo(f"       checks:   {len(profile.checks)}")
    click.echo()


@cli.command()
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def deps(profile: str, as_json: bool) -> None:
    """Check that PROFILE's required executables are on PATH."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.toolchain import check_dependencies

    config = get_registry().profile(profile)
    missing = check_dependencies(config.requires)

    if as_json:
        click.echo(json.dumps({"requires": config.requires, "missing": missing}, indent=2))
        sys.exit(1 if missing else 0)

    if missing:
        click.secho(f"❌ Missing required dependencies: {', '.join(missing)}", fg="red")
        sys.exit(1)
    click.secho(f"✅ All dependencies found: {', '.join(config.requires)}", fg="green")


@cli.command()
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--root", "-C", default=None, help="Repository root (default: cwd).")
@click.option("--python-version", default=None, help="Override the detected python version.")
@click.pass_context
def emit(ctx: click.Context, profile: str, root: str | None, python_version: str | None) -> None:
    """Write PROFILE's config files, keeping any that already exist."""
    from hookstrap.core.data import get_registry
    from hookstrap.core.services.generators import emit_profile, runtime_values

    values = runtime_values()
    if python_version:
        values["python_version"] = python_version

    receipts = emit_profile(get_registry().profile(profile), resolve_root(root), values)
    echo_receipts(receipts, verbose=ctx.obj.get("verbose", False))
    if any(r.failed for r in receipts):
        sys.exit(1)


@cli.command("commit-msg")
@click.argument("message_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def commit_msg(ctx: click.Context, message_file: str) -> None:
    """Lint a commit message file (git commit-msg hook)."""
    from hookstrap.core.services.hooks.commit_lint import conventional_guide, lint_message

    settings = load_settings_or_exit(ctx)
    result = lint_message(Path(message_file), settings.commitlint)

    if result.config_created:
        click.secho("✅ Created commitlint.config.js in repository root", fg="green")

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.ok:
        click.secho("\n❌ Commit message format error detected.\n", fg="red")
        click.secho(conventional_guide(), fg="yellow")
        click.secho("\nCommitlint output:", fg="red")
        click.echo(result.output)
        click.secho("\n❗ Please fix your commit message and try again.", fg="red")
        sys.exit(1)

    click.secho("✅ Commit message passed Conventional Commit check.", fg="green")


# ── Register command groups ──────────────────────────────────────

from hookstrap.ui.cli.bootstrap import bootstrap  # noqa: E402
from hookstrap.ui.cli.hooks import hooks  # noqa: E402
from hookstrap.ui.cli.templates import templates  # noqa: E402
from hookstrap.ui.cli.tools import tools  # noqa: E402

cli.add_command(bootstrap)
cli.add_command(tools)
cli.add_command(hooks)
cli.add_command(templates)


if __name__ == "__main__":
    cli()
