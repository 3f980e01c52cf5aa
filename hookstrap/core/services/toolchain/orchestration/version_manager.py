"""
L5 Orchestration — Version-manager (asdf) bootstrap.

Flow:
    detect shell → remove old install → fetch (clone | archive)
      → per-variant activation block → activate in-process → verify

Switching variants replaces the other variant's startup-file block, since
its install directory has just been removed.

Any failure is terminal for the run: the caller gets a failed Receipt
and no retry is attempted.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from dataclasses import dataclass, field
from pathlib import Path

from hookstrap.core.models.action import Receipt
from hookstrap.core.models.settings import Settings, VersionManagerSettings
from hookstrap.core.observability.logging_config import log_step
from hookstrap.core.persistence.shell_profile import (
    UnsupportedShellError,
    append_block,
    detect_shell,
    marker_for,
    remove_block,
    startup_file,
)
from hookstrap.core.services.toolchain.detection.environment import detect_arch, detect_os
from hookstrap.core.services.toolchain.execution.asdf import AsdfCli
from hookstrap.core.services.toolchain.execution.download import DownloadError, fetch_and_extract
from hookstrap.core.services.toolchain.execution.subprocess_runner import run_command
from hookstrap.core.services.toolchain.execution.system_packages import ensure_binaries

logger = logging.getLogger(__name__)

STEP = "version_manager"
MARKERS = {
    "clone": marker_for("asdf-clone"),
    "archive": marker_for("asdf-archive"),
}
RESTART_HINT = "Please restart the terminal and re-run hookstrap."


@dataclass
class Activation:
    """What "sourcing the startup file" means, for both sides.

    ``rc_lines`` go into the user's startup file; ``path_entries`` and
    ``env_vars`` are applied to this process so the rest of the run can
    see the manager without a new shell.
    """

    rc_lines: list[str] = field(default_factory=list)
    path_entries: list[Path] = field(default_factory=list)
    env_vars: dict[str, str] = field(default_factory=dict)


def _shell_path(path: Path) -> str:
    """Render a path for a startup file, using $HOME where possible."""
    home = Path.home()
    try:
        return "$HOME/" + path.relative_to(home).as_posix()
    except ValueError:
        return path.as_posix()


def activation_for(variant: str, shell: str, vm: VersionManagerSettings) -> Activation:
    """Startup-file lines and process env for a fetch variant."""
    install = vm.install_path
    if variant == "clone":
        lines = [f'. "{_shell_path(install)}/asdf.sh"']
        if shell == "zsh":
            lines += [
                f"fpath=({_shell_path(install)}/completions $fpath)",
                "autoload -Uz compinit && compinit",
            ]
        else:
            lines.append(f'. "{_shell_path(install)}/completions/asdf.bash"')
        return Activation(
            rc_lines=lines,
            path_entries=[install / "bin", install / "shims"],
            env_vars={"ASDF_DIR": str(install)},
        )

    bin_dir = vm.bin_path
    return Activation(
        rc_lines=[
            f'export PATH="{_shell_path(bin_dir)}:$PATH"',
            f'export ASDF_DATA_DIR="{_shell_path(install)}"',
            'export PATH="$ASDF_DATA_DIR/shims:$PATH"',
        ],
        path_entries=[bin_dir, install / "shims"],
        env_vars={"ASDF_DATA_DIR": str(install)},
    )


def apply_activation(activation: Activation) -> None:
    """Prepend PATH entries and export variables in ``os.environ``."""
    for key, value in activation.env_vars.items():
        os.environ[key] = value
    current = os.environ.get("PATH", "").split(os.pathsep)
    for entry in reversed(activation.path_entries):
        entry_str = str(entry)
        if entry_str in current:
            current.remove(entry_str)
        current.insert(0, entry_str)
    os.environ["PATH"] = os.pathsep.join(p for p in current if p)


def archive_url(vm: VersionManagerSettings, os_name: str, arch: str) -> str:
    """Release tarball URL for this platform."""
    return vm.archive_url.format(version=vm.archive_version, os=os_name, arch=arch)


def asdf_cli_for(variant: str) -> AsdfCli:
    """CLI wrapper matching the generation the variant installs."""
    return AsdfCli(legacy=(variant == "clone"))


def _fetch_clone(vm: VersionManagerSettings) -> str | None:
    """git clone the pinned branch.  Returns an error message or None."""
    prereq = ensure_binaries(["git"], step=STEP)
    if prereq.failed:
        return prereq.error
    r = run_command(
        ["git", "clone", vm.clone_url, str(vm.install_path), "--branch", vm.clone_branch],
    )
    if not r.ok:
        return f"git clone of {vm.clone_url} failed: {r.detail}"
    return None


def _fetch_archive(vm: VersionManagerSettings) -> str | None:
    """Download and unpack the release binary.  Returns an error message or None."""
    os_name = detect_os()
    if os_name is None:
        return "Unsupported operating system for the asdf release archive"
    url = archive_url(vm, os_name, detect_arch())
    try:
        fetch_and_extract(url, vm.bin_path)
    except DownloadError as e:
        return str(e)

    binary = vm.bin_path / "asdf"
    if not binary.is_file():
        return f"Archive {url} did not contain an asdf binary"
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return None


def bootstrap_version_manager(
    settings: Settings,
    variant: str,
    *,
    shell_env: str | None = None,
) -> Receipt:
    """Install asdf from scratch and make it usable for the rest of the run.

    Args:
        settings: Loaded settings (install dirs, URLs, pins).
        variant: ``clone`` or ``archive``.
        shell_env: Override for ``$SHELL`` (tests).

    Returns:
        Receipt for the ``version_manager`` step.
    """
    vm = settings.version_manager
    variant = vm.variant or variant

    # ── 1. Shell ──
    try:
        shell = detect_shell(shell_env)
    except UnsupportedShellError as e:
        return Receipt.failure(STEP, "asdf", error=str(e))
    rc_file = startup_file(shell)
    logger.info("Detected %s, startup file %s", shell, rc_file)

    # ── 2. Remove any previous install ──
    if vm.install_path.exists():
        log_step(logger, "Removing existing installation at %s", vm.install_path)
        shutil.rmtree(vm.install_path, ignore_errors=True)

    # ── 3. Fetch ──
    log_step(logger, "Fetching asdf (%s)", variant)
    error = _fetch_clone(vm) if variant == "clone" else _fetch_archive(vm)
    if error:
        return Receipt.failure(STEP, "asdf", error=error, metadata={"variant": variant})

    # ── 4. Startup file ──
    activation = activation_for(variant, shell, vm)
    try:
        for other, marker in MARKERS.items():
            if other != variant and remove_block(rc_file, marker):
                log_step(logger, "Removed %s activation lines from %s", other, rc_file)
        added = append_block(rc_file, MARKERS[variant], activation.rc_lines)
    except OSError as e:
        return Receipt.failure(STEP, "asdf", error=f"Cannot update {rc_file}: {e}")

    # ── 5. Activate and verify ──
    apply_activation(activation)
    if shutil.which("asdf") is None:
        return Receipt.failure(
            STEP,
            "asdf",
            error=f"asdf is not on PATH after setup. {RESTART_HINT}",
            metadata={"variant": variant, "startup_file": str(rc_file)},
        )

    cli = asdf_cli_for(variant)
    version = cli.version() or ""
    if variant != "clone":
        cli.reshim()
    logger.info("asdf ready %s", version)

    return Receipt.success(
        STEP,
        "asdf",
        output=version,
        metadata={
            "variant": variant,
            "shell": shell,
            "startup_file": str(rc_file),
            "block_added": added,
        },
    )
