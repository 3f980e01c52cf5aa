"""
Bootstrap use case — the full profile pipeline.

Flow:
    dependencies → commitlint → version_manager → tools → config
      → hooks_install → hooks_run → summary

Halting steps (a failure ends the run, exit 1):
    dependencies, version_manager, config, hooks_install
Fail-soft steps (failures are collected):
    commitlint (warning only), tools (per tool), hooks_run (per check)

The exit code is 1 when the run halted or any check failed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from hookstrap.core.data import CatalogError, DataRegistry, get_registry
from hookstrap.core.engine.pipeline import PipelineReport, Step, run_pipeline
from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ProfileConfig, ToolSpec
from hookstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)


def _never(_tool: str) -> bool:
    return False


def _latest(_tool: str) -> str:
    return "latest"


@dataclass
class BootstrapOptions:
    """Switches for one run.

    ``confirm`` and ``ask_version`` drive the optional-tool prompts; the
    defaults decline every optional tool so non-interactive runs never
    block.
    """

    install_tools: bool = True
    run_checks: bool = True
    confirm: Callable[[str], bool] = _never
    ask_version: Callable[[str], str] = _latest
    retry: Callable[[str], bool] | None = None
    shell_env: str | None = None
    values: dict[str, str] | None = None


@dataclass
class BootstrapResult:
    """Result of a bootstrap run."""

    profile: ProfileConfig | None = None
    root: Path | None = None
    report: PipelineReport | None = None
    error: str | None = None
    missing: list[str] = field(default_factory=list)

    @property
    def halted(self) -> bool:
        return self.report is not None and self.report.halted_at is not None

    @property
    def failed_checks(self) -> list[str]:
        if self.report is None:
            return []
        return [r.target for r in self.report.failures("hooks_run")]

    @property
    def failed_tools(self) -> list[str]:
        if self.report is None:
            return []
        return [r.target for r in self.report.failures("tools")]

    @property
    def warnings(self) -> list[Receipt]:
        """Non-fatal failures: tools and the commitlint install."""
        if self.report is None:
            return []
        return self.report.failures("tools") + self.report.failures("commitlint")

    @property
    def exit_code(self) -> int:
        if self.error or self.halted or self.failed_checks:
            return 1
        return 0

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.name.value if self.profile else None,
            "root": str(self.root) if self.root else None,
            "exit_code": self.exit_code,
            "error": self.error,
            "missing": self.missing,
            "failed_checks": self.failed_checks,
            "failed_tools": self.failed_tools,
            "report": self.report.to_dict() if self.report else None,
        }


# ── Step bodies ─────────────────────────────────────────────────


def verify_dependencies(profile: ProfileConfig) -> list[Receipt]:
    """Dependency check: every required executable must be on PATH."""
    from hookstrap.core.services.toolchain import check_dependencies

    missing = check_dependencies(profile.requires)
    if missing:
        return [
            Receipt.failure(
                "dependencies",
                "requires",
                error=f"Missing required dependencies: {', '.join(missing)}",
                metadata={"missing": missing},
            )
        ]
    return [Receipt.success("dependencies", "requires", output=", ".join(profile.requires))]


def _commitlint_step(profile: ProfileConfig, settings: Settings) -> list[Receipt]:
    from hookstrap.core.services.hooks.commit_lint import ensure_commitlint

    if "commit-msg" not in profile.hook_types:
        return [Receipt.skip("commitlint", "commitlint", reason="profile has no commit-msg hook")]
    receipt = ensure_commitlint(settings.commitlint)
    if receipt.failed:
        logger.warning("commitlint: %s", receipt.error)
    return [receipt]


def _version_manager_step(
    profile: ProfileConfig, settings: Settings, options: BootstrapOptions
) -> list[Receipt]:
    from hookstrap.core.services.toolchain import bootstrap_version_manager

    if not profile.manages_toolchains:
        return [Receipt.skip("version_manager", "asdf", reason="profile pins no toolchains")]
    if not options.install_tools:
        return [Receipt.skip("version_manager", "asdf", reason="tool installation disabled")]
    return [
        bootstrap_version_manager(settings, profile.version_manager, shell_env=options.shell_env)
    ]


def resolve_tools(profile: ProfileConfig, settings: Settings) -> list[ToolSpec]:
    """Mandatory tools with per-tool version overrides applied."""
    return [
        ToolSpec(
            name=t.name,
            version=settings.tool_versions.get(t.name, t.version),
            plugin_url=t.plugin_url,
        )
        for t in profile.tools
    ]


def _tools_step(
    profile: ProfileConfig,
    settings: Settings,
    options: BootstrapOptions,
    registry: DataRegistry,
) -> list[Receipt]:
    from hookstrap.core.services.toolchain import ToolInstaller, asdf_cli_for

    if not profile.manages_toolchains:
        return [Receipt.skip("tools", "tools", reason="profile pins no toolchains")]
    if not options.install_tools:
        return [Receipt.skip("tools", "tools", reason="tool installation disabled")]

    variant = settings.version_manager.variant or profile.version_manager
    installer = ToolInstaller(
        cli=asdf_cli_for(variant),
        ledger_path=settings.ledger_file,
        plugin_sources={**registry.plugin_sources, **settings.plugin_sources},
    )
    receipts = installer.install_batch(resolve_tools(profile, settings))
    receipts += installer.install_optional(
        profile.optional_tools,
        confirm=options.confirm,
        ask_version=options.ask_version,
        retry=options.retry,
    )
    return receipts


def _config_step(
    profile: ProfileConfig, root: Path, options: BootstrapOptions, registry: DataRegistry
) -> list[Receipt]:
    from hookstrap.core.services.generators import emit_profile

    return emit_profile(profile, root, options.values, registry)


def _hooks_install_step(profile: ProfileConfig, settings: Settings, root: Path) -> list[Receipt]:
    from hookstrap.core.services.hooks import install_hooks, register_git_templates

    receipts = install_hooks(profile, root, settings.hook_runner)
    if any(r.failed for r in receipts):
        return receipts
    if profile.register_git_templates:
        receipts += register_git_templates(settings.git_template_path)
    return receipts


def _hooks_run_step(
    profile: ProfileConfig, settings: Settings, root: Path, options: BootstrapOptions
) -> list[Receipt]:
    from hookstrap.core.services.hooks import run_checks

    if not options.run_checks:
        return [Receipt.skip("hooks_run", "checks", reason="checks disabled")]
    return run_checks(profile, root, settings.hook_runner)


# ── Pipeline ────────────────────────────────────────────────────


def build_steps(
    profile: ProfileConfig,
    settings: Settings,
    root: Path,
    options: BootstrapOptions,
    registry: DataRegistry,
) -> list[Step]:
    """The ordered steps of a bootstrap run for ``profile``."""
    return [
        Step(
            "dependencies",
            lambda: verify_dependencies(profile),
            description="Checking required dependencies",
        ),
        Step(
            "commitlint",
            lambda: _commitlint_step(profile, settings),
            halt_on_failure=False,
            description="Checking commit-message linter",
        ),
        Step(
            "version_manager",
            lambda: _version_manager_step(profile, settings, options),
            description="Setting up the version manager",
        ),
        Step(
            "tools",
            lambda: _tools_step(profile, settings, options, registry),
            halt_on_failure=False,
            description="Installing tools",
        ),
        Step(
            "config",
            lambda: _config_step(profile, root, options, registry),
            description="Writing config files",
        ),
        Step(
            "hooks_install",
            lambda: _hooks_install_step(profile, settings, root),
            description="Installing git hooks",
        ),
        Step(
            "hooks_run",
            lambda: _hooks_run_step(profile, settings, root, options),
            halt_on_failure=False,
            description="Running checks",
        ),
    ]


def run_bootstrap(
    profile_name: str,
    settings: Settings | None = None,
    root: Path | None = None,
    options: BootstrapOptions | None = None,
    registry: DataRegistry | None = None,
) -> BootstrapResult:
    """Bootstrap ``profile_name`` in ``root`` (default: cwd).

    Args:
        profile_name: One of the catalog profiles.
        settings: Loaded settings (defaults if None).
        root: Target repository root.
        options: Run switches and prompt callbacks.
        registry: Data registry (process singleton if None).

    Returns:
        BootstrapResult; ``exit_code`` is the process exit code.
    """
    settings = settings or Settings()
    options = options or BootstrapOptions()
    registry = registry or get_registry()
    root = (root or Path.cwd()).resolve()
    result = BootstrapResult(root=root)

    try:
        profile = registry.profile(profile_name)
    except CatalogError as e:
        result.error = str(e)
        return result
    result.profile = profile

    logger.info("Bootstrapping profile '%s' in %s", profile.name.value, root)
    result.report = run_pipeline(build_steps(profile, settings, root, options, registry))

    deps = result.report.step_receipts.get("dependencies", [])
    if deps and deps[0].failed:
        result.missing = list(deps[0].metadata.get("missing", []))
        result.error = deps[0].error
    elif result.report.halted_at:
        failed = result.report.failures(result.report.halted_at)
        result.error = failed[0].error if failed else f"{result.report.halted_at} failed"

    return result
