"""
L3 Detection — System dependency checking.

Read-only probes for binary availability and the host package manager.
"""

from __future__ import annotations

import logging
import shutil

from hookstrap.core.services.toolchain.data.constants import _PKG_MANAGERS

logger = logging.getLogger(__name__)


def check_dependencies(names: list[str]) -> list[str]:
    """Which of ``names`` are not resolvable on PATH.

    Pure and side-effect free.

    Args:
        names: Executable names, checked in the given order.

    Returns:
        The missing names, in the order they were checked.
    """
    missing = [name for name in names if shutil.which(name) is None]
    if missing:
        logger.debug("Missing executables: %s", ", ".join(missing))
    return missing


def detect_package_manager() -> str | None:
    """First supported package manager found on PATH, or None."""
    for name, _cmd in _PKG_MANAGERS:
        if shutil.which(name):
            return name
    return None
