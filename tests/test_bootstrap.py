"""
Tests for the bootstrap use case — step order, halting and exit codes.

Services are patched where the use case imports them, so no subprocess
or network call is made.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from hookstrap.core.models.action import Receipt
from hookstrap.core.use_cases.bootstrap import (
    BootstrapOptions,
    resolve_tools,
    run_bootstrap,
    verify_dependencies,
)

_TOOLCHAIN = "hookstrap.core.services.toolchain"
_HOOKS = "hookstrap.core.services.hooks"
_LINT = "hookstrap.core.services.hooks.commit_lint"

VALUES = {"python_version": "3.11"}


def _hooks_ok(profile, root, runner="pre-commit"):
    return [Receipt.success("hooks_install", "pre-commit")]


def _checks_ok(profile, root, runner="pre-commit", checks=None):
    return [Receipt.success("hooks_run", c) for c in profile.checks]


@pytest.fixture
def options() -> BootstrapOptions:
    return BootstrapOptions(values=VALUES, shell_env="/bin/bash")


class TestVerifyDependencies:
    def test_missing_in_order(self, registry):
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=["python3", "npx"]):
            receipts = verify_dependencies(registry.profile("global"))
        assert receipts[0].failed
        assert receipts[0].error == "Missing required dependencies: python3, npx"
        assert receipts[0].metadata["missing"] == ["python3", "npx"]

    def test_all_present(self, registry):
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]):
            assert verify_dependencies(registry.profile("python"))[0].ok


class TestRunBootstrap:
    def test_missing_dependencies_halts_before_changes(self, settings, repo, registry, options):
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=["pre-commit"]), \
             patch(f"{_HOOKS}.install_hooks") as install:
            result = run_bootstrap("python", settings, repo, options, registry)

        assert result.exit_code == 1
        assert result.missing == ["pre-commit"]
        assert result.report.halted_at == "dependencies"
        assert list(result.report.step_receipts) == ["dependencies"]
        assert list(repo.iterdir()) == []
        install.assert_not_called()

    def test_python_happy_path(self, settings, repo: Path, registry, options):
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.run_checks", side_effect=_checks_ok):
            result = run_bootstrap("python", settings, repo, options, registry)

        assert result.exit_code == 0
        assert result.error is None
        steps = result.report.step_receipts
        assert list(steps) == [
            "dependencies", "commitlint", "version_manager", "tools",
            "config", "hooks_install", "hooks_run",
        ]
        assert steps["version_manager"][0].skipped
        assert steps["tools"][0].skipped
        assert "python3.11" in (repo / ".pre-commit-config.yaml").read_text()
        assert [r.target for r in steps["hooks_run"]] == registry.profile("python").checks

    def test_failed_check_sets_exit_code(self, settings, repo, registry, options):
        def checks(profile, root, runner="pre-commit", checks=None):
            return [
                Receipt.failure("hooks_run", c, error="exit 1") if c == "mypy"
                else Receipt.success("hooks_run", c)
                for c in profile.checks
            ]

        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.run_checks", side_effect=checks):
            result = run_bootstrap("python", settings, repo, options, registry)

        assert result.exit_code == 1
        assert not result.halted
        assert result.failed_checks == ["mypy"]
        assert len(result.report.step_receipts["hooks_run"]) == 19

    def test_hooks_install_failure_halts(self, settings, repo, registry, options):
        failure = [
            Receipt.failure("hooks_install", "pre-commit", error="pre-commit is not installed or not on PATH")
        ]
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_HOOKS}.install_hooks", return_value=failure), \
             patch(f"{_HOOKS}.run_checks") as run:
            result = run_bootstrap("python", settings, repo, options, registry)

        assert result.exit_code == 1
        assert result.report.halted_at == "hooks_install"
        assert "not on PATH" in result.error
        run.assert_not_called()

    def test_version_manager_failure_halts(self, settings, repo, registry, options):
        failure = Receipt.failure(
            "version_manager", "asdf", error="Unsupported shell: fish. Only bash and zsh are supported."
        )
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_LINT}.ensure_commitlint", return_value=Receipt.skip("commitlint", "commitlint")), \
             patch(f"{_TOOLCHAIN}.bootstrap_version_manager", return_value=failure):
            result = run_bootstrap("terraform", settings, repo, options, registry)

        assert result.report.halted_at == "version_manager"
        assert result.exit_code == 1
        assert "Unsupported shell" in result.error
        assert not (repo / ".pre-commit-config.yaml").exists()

    def test_tool_failures_are_warnings(self, settings, repo, registry, options):
        vm = Receipt.success("version_manager", "asdf")
        tools = [
            Receipt.success("tools", "gitleaks"),
            Receipt.failure("tools", "tflint", error="Failed to install tflint 0.59.1"),
        ]
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_LINT}.ensure_commitlint", return_value=Receipt.skip("commitlint", "commitlint")), \
             patch(f"{_TOOLCHAIN}.bootstrap_version_manager", return_value=vm), \
             patch(f"{_TOOLCHAIN}.ToolInstaller") as installer_cls, \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.run_checks", side_effect=_checks_ok):
            installer_cls.return_value.install_batch.return_value = tools
            installer_cls.return_value.install_optional.return_value = []
            result = run_bootstrap("terraform", settings, repo, options, registry)

        assert result.exit_code == 0
        assert result.failed_tools == ["tflint"]
        assert [w.target for w in result.warnings] == ["tflint"]

    def test_commitlint_failure_is_a_warning(self, settings, repo, registry, options):
        failed = Receipt.failure("commitlint", "commitlint", error="npm install failed: EACCES")
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_LINT}.ensure_commitlint", return_value=failed), \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.run_checks", side_effect=_checks_ok):
            result = run_bootstrap("typescript", settings, repo, options, registry)

        assert result.exit_code == 0
        assert [w.step for w in result.warnings] == ["commitlint"]
        assert (repo / ".prettierrc.json").is_file()

    def test_no_tools_option(self, settings, repo, registry):
        opts = BootstrapOptions(install_tools=False, run_checks=False, values=VALUES)
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_LINT}.ensure_commitlint", return_value=Receipt.skip("commitlint", "commitlint")), \
             patch(f"{_TOOLCHAIN}.bootstrap_version_manager") as vm, \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.register_git_templates", return_value=[]):
            result = run_bootstrap("golang", settings, repo, opts, registry)

        vm.assert_not_called()
        assert result.exit_code == 0
        assert result.report.step_receipts["hooks_run"][0].skipped

    def test_git_templates_registered_when_requested(self, settings, repo, registry):
        opts = BootstrapOptions(install_tools=False, run_checks=False, values=VALUES)
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=[]), \
             patch(f"{_HOOKS}.install_hooks", side_effect=_hooks_ok), \
             patch(f"{_HOOKS}.register_git_templates", return_value=[]) as templates:
            run_bootstrap("global", settings, repo, opts, registry)
        templates.assert_called_once_with(settings.git_template_path)

    def test_unknown_profile(self, settings, repo, registry):
        result = run_bootstrap("rust", settings, repo, registry=registry)
        assert result.exit_code == 1
        assert result.report is None
        assert "Unknown profile 'rust'" in result.error

    def test_to_dict(self, settings, repo, registry, options):
        with patch(f"{_TOOLCHAIN}.check_dependencies", return_value=["git"]):
            data = run_bootstrap("python", settings, repo, options, registry).to_dict()
        assert data["profile"] == "python"
        assert data["missing"] == ["git"]
        assert data["report"]["halted_at"] == "dependencies"


class TestResolveTools:
    def test_overrides_applied(self, registry, settings):
        settings.tool_versions = {"gitleaks": "8.22.0"}
        tools = {t.name: t.version for t in resolve_tools(registry.profile("terraform"), settings)}
        assert tools["gitleaks"] == "8.22.0"
        assert tools["tflint"] == "0.59.1"
