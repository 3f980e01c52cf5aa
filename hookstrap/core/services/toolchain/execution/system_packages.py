"""
L4 Execution — Prerequisite installs through the host package manager.
"""

from __future__ import annotations

import logging

from hookstrap.core.models.action import Receipt
from hookstrap.core.services.toolchain.data.constants import _PKG_MANAGERS, _ROOT_PKG_MANAGERS
from hookstrap.core.services.toolchain.detection.system_deps import (
    check_dependencies,
    detect_package_manager,
)
from hookstrap.core.services.toolchain.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def ensure_binaries(binaries: list[str], *, step: str = "prerequisites") -> Receipt:
    """Install any of ``binaries`` that are missing from PATH.

    The package name is assumed to match the binary name (``git``,
    ``curl``, ``tar``), which holds for every prerequisite we need.
    """
    missing = check_dependencies(binaries)
    if not missing:
        return Receipt.skip(step, ",".join(binaries), reason="already installed")

    pm = detect_package_manager()
    if pm is None:
        return Receipt.failure(
            step,
            ",".join(missing),
            error=(
                f"Missing {', '.join(missing)} and no supported package manager "
                "(apt-get, dnf, yum, apk, brew) was found. Install them manually."
            ),
        )

    base = dict(_PKG_MANAGERS)[pm]
    logger.info("Installing %s with %s", ", ".join(missing), pm)

    if pm == "apt-get":
        update = run_command(["apt-get", "update"], needs_sudo=True, capture=False)
        if not update.ok:
            logger.warning("apt-get update failed, trying the install anyway")

    result = run_command([*base, *missing], needs_sudo=pm in _ROOT_PKG_MANAGERS, capture=False)
    if not result.ok:
        return Receipt.failure(
            step,
            ",".join(missing),
            error=f"{pm} could not install {', '.join(missing)}: {result.detail}",
        )

    still_missing = check_dependencies(missing)
    if still_missing:
        return Receipt.failure(
            step,
            ",".join(still_missing),
            error=f"Installed via {pm} but still not on PATH: {', '.join(still_missing)}",
        )
    return Receipt.success(step, ",".join(missing), output=f"installed via {pm}")
