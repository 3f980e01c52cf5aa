"""
L3 Detection — Host platform and interpreter probes.

Read-only: environment reads and ``python3 -V``.
"""

from __future__ import annotations

import logging
import platform
import re
import shutil
import subprocess
import sys

from hookstrap.core.services.toolchain.data.constants import _IARCH_MAP, _OS_MAP

logger = logging.getLogger(__name__)

_PY_VERSION_RE = re.compile(r"Python\s+(\d+)\.(\d+)")


def detect_os() -> str | None:
    """``linux`` / ``darwin``, or None for unsupported systems."""
    return _OS_MAP.get(platform.system())


def detect_arch() -> str:
    """Machine architecture, normalized to release-asset naming."""
    machine = platform.machine()
    return _IARCH_MAP.get(machine, machine.lower())


def detect_python_version() -> str:
    """``major.minor`` of the ``python3`` on PATH.

    Falls back to the running interpreter when ``python3`` is missing or
    its output cannot be parsed.
    """
    fallback = f"{sys.version_info.major}.{sys.version_info.minor}"
    if shutil.which("python3") is None:
        logger.debug("python3 not on PATH, using running interpreter %s", fallback)
        return fallback
    try:
        r = subprocess.run(["python3", "-V"], capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not run python3 -V (%s), using %s", e, fallback)
        return fallback

    # Python 2 printed the version on stderr
    match = _PY_VERSION_RE.search(r.stdout or r.stderr or "")
    if not match:
        logger.warning("Unrecognised python3 -V output, using %s", fallback)
        return fallback
    return f"{match.group(1)}.{match.group(2)}"
