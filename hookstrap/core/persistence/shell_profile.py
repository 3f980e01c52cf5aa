"""
Shell startup file — detection and marker-guarded appends.

Only bash and zsh are supported.  Activation lines are written inside a
block that starts with a literal marker comment; if the marker is
already in the file nothing is appended, so repeated runs never grow
the file.  Each block is removable by its marker, which lets a caller
swap one set of activation lines for another.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Shell name → startup file that interactive shells source.
_PROFILE_MAP: dict[str, str] = {
    "bash": "~/.bashrc",
    "zsh": "~/.zshrc",
}

BLOCK_END = "# <<< hookstrap <<<"


class UnsupportedShellError(Exception):
    """Raised when the login shell is neither bash nor zsh."""

    def __init__(self, shell: str) -> None:
        self.shell = shell
        super().__init__(
            f"Unsupported shell: {shell or '(unknown)'}. Only bash and zsh are supported."
        )


def detect_shell(shell_env: str | None = None) -> str:
    """Shell name from ``$SHELL`` (``/usr/bin/zsh`` → ``zsh``).

    Raises:
        UnsupportedShellError: Anything other than bash or zsh.
    """
    if shell_env is None:
        shell_env = os.environ.get("SHELL", "")
    shell = os.path.basename(shell_env.strip())
    if shell not in _PROFILE_MAP:
        raise UnsupportedShellError(shell)
    return shell


def startup_file(shell: str) -> Path:
    """Path of the startup file for a supported shell."""
    if shell not in _PROFILE_MAP:
        raise UnsupportedShellError(shell)
    return Path(_PROFILE_MAP[shell]).expanduser()


def marker_for(name: str) -> str:
    """Marker comment that opens the ``name`` block."""
    return f"# >>> hookstrap {name} >>>"


def has_marker(path: Path, marker: str) -> bool:
    if not path.is_file():
        return False
    return marker in path.read_text(encoding="utf-8", errors="replace")


def append_block(path: Path, marker: str, lines: list[str]) -> bool:
    """Append ``lines`` to ``path`` inside a marker-guarded block.

    Args:
        path: Startup file (created if missing).
        marker: Literal marker comment that opens the block.
        lines: Lines to write between the markers.

    Returns:
        True if the block was appended, False if the marker was present.
    """
    if has_marker(path, marker):
        logger.info("%s already configured (marker found), leaving it alone", path)
        return False

    existing = path.read_text(encoding="utf-8", errors="replace") if path.is_file() else ""
    prefix = "" if not existing or existing.endswith("\n") else "\n"

    block = "\n".join([marker, *lines, BLOCK_END]) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{prefix}\n{block}")

    logger.info("Added %d line(s) to %s", len(lines), path)
    return True


def remove_block(path: Path, marker: str) -> bool:
    """Drop the block opened by ``marker``, up to and including ``BLOCK_END``.

    The blank separator line ``append_block`` writes before the marker
    goes too.  Bytes that are not valid UTF-8 are written back unchanged.

    Returns:
        True if a block was removed.
    """
    if not has_marker(path, marker):
        return False

    lines = path.read_text(encoding="utf-8", errors="surrogateescape").splitlines(keepends=True)
    kept: list[str] = []
    inside = False
    for line in lines:
        stripped = line.rstrip("\r\n")
        if not inside and stripped == marker:
            inside = True
            if kept and not kept[-1].strip():
                kept.pop()
            continue
        if inside:
            if stripped == BLOCK_END:
                inside = False
            continue
        kept.append(line)

    path.write_text("".join(kept), encoding="utf-8", errors="surrogateescape")
    logger.info("Removed %s block from %s", marker, path)
    return True
