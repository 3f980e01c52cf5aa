"""
L4 Execution — asdf version manager wrapper.

Thin layer over the ``asdf`` CLI.  Two generations are supported:
the shell-script releases fetched by git clone (``asdf global``) and
the single-binary releases from v0.16 on (``asdf set --home``).
"""

from __future__ import annotations

import logging

from hookstrap.core.services.toolchain.execution.subprocess_runner import (
    CommandResult,
    run_command,
)

logger = logging.getLogger(__name__)


def _parse_listing(text: str) -> list[str]:
    """One entry per line, current-version ``*`` marker removed.

    Lines containing spaces are status messages (``No versions
    installed``) rather than entries.
    """
    entries: list[str] = []
    for line in text.splitlines():
        entry = line.strip().lstrip("*").strip()
        if entry and " " not in entry:
            entries.append(entry)
    return entries


class AsdfCli:
    """Version-manager commands used by the tool installer.

    Args:
        binary: Executable to call (resolved on PATH).
        legacy: True for clone-installed releases that still have
            ``asdf global``.
    """

    def __init__(self, binary: str = "asdf", *, legacy: bool = False) -> None:
        self.binary = binary
        self.legacy = legacy

    def _run(self, *args: str, capture: bool = True) -> CommandResult:
        return run_command([self.binary, *args], capture=capture)

    def version(self) -> str | None:
        r = self._run("--version")
        return r.stdout.strip() if r.ok else None

    def plugins(self) -> list[str]:
        """Registered plugin names (empty when none or on error)."""
        r = self._run("plugin", "list")
        if not r.ok:
            return []
        return _parse_listing(r.stdout)

    def add_plugin(self, name: str, url: str) -> CommandResult:
        return self._run("plugin", "add", name, url)

    def installed_versions(self, tool: str) -> list[str]:
        """Versions of ``tool`` already installed, as the manager prints them."""
        r = self._run("list", tool)
        if not r.ok:
            return []
        return _parse_listing(r.stdout)

    def latest(self, tool: str) -> str | None:
        r = self._run("latest", tool)
        if not r.ok:
            return None
        value = r.stdout.strip().splitlines()
        return value[-1].strip() if value else None

    def install(self, tool: str, version: str) -> CommandResult:
        # Plugin build output goes straight to the terminal
        return self._run("install", tool, version, capture=False)

    def set_global(self, tool: str, version: str) -> CommandResult:
        if self.legacy:
            return self._run("global", tool, version)
        return self._run("set", "--home", tool, version)

    def reshim(self) -> CommandResult:
        return self._run("reshim")
