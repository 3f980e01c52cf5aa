"""
L5 Orchestration — Tool installation through the version manager.

Per tool:
    plugin registered? → add from catalog (unknown tool = fail closed)
    version installed? → skip the install, else install
    activate globally → record in the ledger

Per batch: each tool is isolated.  A failure is logged, recorded in its
Receipt and the batch moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ToolSpec
from hookstrap.core.observability.logging_config import log_step
from hookstrap.core.persistence.tool_versions import LedgerError, update_ledger
from hookstrap.core.services.toolchain.execution.asdf import AsdfCli

logger = logging.getLogger(__name__)

STEP = "tools"

# (tool) -> install it?
ConfirmFn = Callable[[str], bool]
# (tool) -> version string ("latest" allowed)
AskVersionFn = Callable[[str], str]


class ToolInstaller:
    """Install and pin tools, keeping the ledger in step.

    Args:
        cli: Version-manager wrapper.
        ledger_path: ``tool version`` ledger file.
        plugin_sources: Tool name → plugin repository URL.
    """

    def __init__(
        self,
        cli: AsdfCli,
        ledger_path: Path,
        plugin_sources: dict[str, str],
    ) -> None:
        self.cli = cli
        self.ledger_path = ledger_path
        self.plugin_sources = dict(plugin_sources)
        self._plugins: list[str] | None = None

    def _registered_plugins(self) -> list[str]:
        if self._plugins is None:
            self._plugins = self.cli.plugins()
        return self._plugins

    def ensure_plugin(self, name: str, url: str | None = None) -> str | None:
        """Register the plugin for ``name``.  Returns an error or None."""
        if name in self._registered_plugins():
            return None

        url = url or self.plugin_sources.get(name)
        if not url:
            return f"No plugin URL specified for {name}."

        logger.info("Adding plugin %s from %s", name, url)
        r = self.cli.add_plugin(name, url)
        if not r.ok:
            return f"Failed to add plugin {name}: {r.detail}"
        self._registered_plugins().append(name)
        return None

    def install(self, spec: ToolSpec) -> Receipt:
        """Install one tool at one version and make it the global default."""
        name = spec.name

        error = self.ensure_plugin(name, spec.plugin_url)
        if error:
            return Receipt.failure(STEP, name, error=error)

        version = spec.version
        if spec.is_latest:
            resolved = self.cli.latest(name)
            if not resolved:
                return Receipt.failure(STEP, name, error=f"Cannot resolve latest version of {name}")
            version = resolved

        already = version in self.cli.installed_versions(name)
        if already:
            logger.info("%s %s already installed, skipping install", name, version)
        else:
            log_step(logger, "Installing %s %s", name, version)
            r = self.cli.install(name, version)
            if not r.ok:
                return Receipt.failure(
                    STEP,
                    name,
                    error=(
                        f"Failed to install {name} {version}. "
                        f"Check available versions with: asdf list all {name}"
                    ),
                    metadata={"version": version},
                )

        r = self.cli.set_global(name, version)
        if not r.ok:
            return Receipt.failure(
                STEP,
                name,
                error=f"Failed to set {name} {version} globally: {r.detail}",
                metadata={"version": version},
            )

        try:
            update_ledger(self.ledger_path, name, version)
        except LedgerError as e:
            return Receipt.failure(STEP, name, error=str(e), metadata={"version": version})

        logger.info("%s %s ready", name, version)
        return Receipt.success(
            STEP,
            name,
            output=version,
            metadata={"version": version, "already_installed": already},
        )

    def install_batch(self, tools: list[ToolSpec]) -> list[Receipt]:
        """Install every tool in order; one failure never stops the rest."""
        receipts: list[Receipt] = []
        for spec in tools:
            receipt = self.install(spec)
            if receipt.failed:
                logger.error("%s: %s", spec.name, receipt.error)
            receipts.append(receipt)
        return receipts

    def install_optional(
        self,
        names: list[str],
        confirm: ConfirmFn,
        ask_version: AskVersionFn,
        retry: ConfirmFn | None = None,
    ) -> list[Receipt]:
        """Offer each optional tool; re-prompt for a version after a failure.

        Args:
            names: Optional tool names, in order.
            confirm: Asked once per tool.  False = skipped receipt.
            ask_version: Asked for the version to install.
            retry: Asked after a failed install.  Defaults to ``confirm``.
        """
        retry = retry or confirm
        receipts: list[Receipt] = []
        for name in names:
            if not confirm(name):
                receipts.append(Receipt.skip(STEP, name, reason="declined"))
                continue

            while True:
                version = ask_version(name).strip() or "latest"
                receipt = self.install(ToolSpec(name=name, version=version))
                if receipt.ok:
                    break
                logger.error("%s: %s", name, receipt.error)
                if not retry(name):
                    break
            receipts.append(receipt)
        return receipts
