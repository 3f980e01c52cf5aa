"""
Tool-version ledger — atomic read/update of ``~/.tool-versions``.

The ledger is a flat text file, one ``tool version`` pair per line.
It holds at most one line per tool: an update drops the stale line and
appends the new one.  Writes are atomic (write to a temp file in the
same directory, then rename) so an interrupted update leaves the
previous ledger untouched.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Raised when the ledger cannot be read or written."""


def _tool_token(line: str) -> str:
    """First whitespace-separated token of a ledger line, or ''."""
    parts = line.split()
    return parts[0] if parts else ""


def read_ledger(path: Path) -> dict[str, str]:
    """Parse the ledger into ``{tool: version}``.

    Missing files yield an empty mapping.  Blank lines and ``#`` comments
    are ignored.  If a tool appears more than once (hand-edited file),
    the last line wins, matching the update rule.
    """
    if not path.is_file():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LedgerError(f"Cannot read ledger {path}: {e}") from e

    entries: dict[str, str] = {}
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split()
        entries[parts[0]] = " ".join(parts[1:])
    return entries


def update_ledger(path: Path, tool: str, version: str) -> None:
    """Record ``tool version`` in the ledger, replacing any earlier line.

    Every other line is kept as-is and in order; the new line goes last.

    Args:
        path: Ledger file (created if missing).
        tool: Tool name, must not contain whitespace.
        version: Version string recorded verbatim.

    Raises:
        LedgerError: Invalid input, or the write failed.  On failure the
            previous ledger is left byte-for-byte unchanged.
    """
    if not tool or any(c.isspace() for c in tool):
        raise LedgerError(f"Invalid tool name for ledger: {tool!r}")
    if not version or any(c.isspace() for c in version):
        raise LedgerError(f"Invalid version for ledger: {version!r}")

    path.parent.mkdir(parents=True, exist_ok=True)

    existing: list[str] = []
    if path.is_file():
        try:
            existing = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise LedgerError(f"Cannot read ledger {path}: {e}") from e

    kept = [line for line in existing if _tool_token(line) != tool]
    kept.append(f"{tool} {version}")
    content = "\n".join(kept) + "\n"

    # Atomic write: temp file in same directory, then rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tool-versions_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            if path.exists():
                os.chmod(tmp, path.stat().st_mode & 0o777)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise LedgerError(f"Failed to update ledger {path}: {e}") from e

    logger.debug("Ledger %s: %s %s", path, tool, version)
