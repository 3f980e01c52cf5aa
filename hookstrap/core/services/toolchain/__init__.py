"""
Toolchain service — version manager bootstrap and tool installs.

Layers (lower layers never import higher ones):
    data/           L0 constants
    detection/      L3 read-only probes
    execution/      L4 subprocess, download, asdf, package manager
    orchestration/  L5 version-manager bootstrap, tool installer

Public symbols are re-exported here::

    from hookstrap.core.services.toolchain import ToolInstaller, check_dependencies
"""

from hookstrap.core.services.toolchain.detection.environment import (
    detect_arch,
    detect_os,
    detect_python_version,
)
from hookstrap.core.services.toolchain.detection.system_deps import (
    check_dependencies,
    detect_package_manager,
)
from hookstrap.core.services.toolchain.execution.asdf import AsdfCli
from hookstrap.core.services.toolchain.execution.subprocess_runner import (
    CommandResult,
    run_command,
)
from hookstrap.core.services.toolchain.orchestration.installer import ToolInstaller
from hookstrap.core.services.toolchain.orchestration.version_manager import (
    asdf_cli_for,
    bootstrap_version_manager,
)

__all__ = [
    "AsdfCli",
    "CommandResult",
    "ToolInstaller",
    "asdf_cli_for",
    "bootstrap_version_manager",
    "check_dependencies",
    "detect_arch",
    "detect_os",
    "detect_package_manager",
    "detect_python_version",
    "run_command",
]
