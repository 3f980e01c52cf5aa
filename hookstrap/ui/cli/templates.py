"""
CLI commands for inspecting and exporting profile templates.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from hookstrap.ui.cli.common import PROFILE_CHOICE, echo_receipts


@click.group()
def templates() -> None:
    """Templates — show or export the rendered config of a profile."""


def _render(profile: str, python_version: str | None):
    from hookstrap.core.data import CatalogError, get_registry
    from hookstrap.core.services.generators import render_profile_files, runtime_values

    values = runtime_values()
    if python_version:
        values["python_version"] = python_version
    try:
        return render_profile_files(get_registry().profile(profile), values)
    except CatalogError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@templates.command("show")
@click.argument("profile", type=PROFILE_CHOICE)
@click.option("--python-version", default=None, help="Override the detected python version.")
def show(profile: str, python_version: str | None) -> None:
    """Print every rendered artifact of PROFILE."""
    for generated in _render(profile, python_version):
        click.secho(f"# ── {generated.path} ──", fg="cyan")
        click.echo(generated.content)


@templates.command("export")
@click.argument("profile", type=PROFILE_CHOICE)
@click.argument("dest", type=click.Path(file_okay=False))
@click.option("--python-version", default=None, help="Override the detected python version.")
def export(profile: str, dest: str, python_version: str | None) -> None:
    """Write PROFILE's artifacts into DEST (existing files are kept)."""
    from hookstrap.core.services.generators import write_generated_file

    root = Path(dest)
    root.mkdir(parents=True, exist_ok=True)
    receipts = [write_generated_file(root, g) for g in _render(profile, python_version)]
    echo_receipts(receipts)
    if any(r.failed for r in receipts):
        sys.exit(1)
