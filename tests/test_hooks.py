"""
Tests for hook services — runner invocation, git templates, commitlint.
"""

from pathlib import Path
from unittest.mock import patch

from conftest import failed_result, ok_result

from hookstrap.core.models.profile import ProfileConfig
from hookstrap.core.models.settings import CommitlintSettings
from hookstrap.core.services.hooks import (
    configured_hook_ids,
    install_hooks,
    register_git_templates,
    run_checks,
)
from hookstrap.core.services.hooks.commit_lint import (
    CONVENTIONAL_TYPES,
    conventional_guide,
    ensure_commitlint,
    lint_message,
)

_RUNNER = "hookstrap.core.services.hooks.runner"
_TEMPLATES = "hookstrap.core.services.hooks.git_templates"
_LINT = "hookstrap.core.services.hooks.commit_lint"

CONFIG = """\
repos:
  - repo: https://github.com/pre-commit/pre-commit-hooks
    rev: v6.0.0
    hooks:
      - id: check-yaml
      - id: trailing-whitespace
  - repo: https://github.com/psf/black
    rev: 23.9.1
    hooks:
      - id: black
"""


def _profile(**kwargs) -> ProfileConfig:
    return ProfileConfig(name="python", **kwargs)


class TestConfiguredHookIds:
    def test_reads_ids(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_text(CONFIG)
        assert configured_hook_ids(repo) == {"check-yaml", "trailing-whitespace", "black"}

    def test_missing_file(self, repo: Path):
        assert configured_hook_ids(repo) is None

    def test_invalid_yaml(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_text("repos: [\n")
        assert configured_hook_ids(repo) is None

    def test_undecodable_file(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_bytes(b"repos: [] # \xff\n")
        assert configured_hook_ids(repo) is None


class TestInstallHooks:
    def test_runner_missing_is_terminal(self, repo: Path):
        with patch(f"{_RUNNER}.shutil.which", return_value=None):
            receipts = install_hooks(_profile(), repo)
        assert len(receipts) == 1
        assert receipts[0].failed
        assert "pre-commit is not installed" in receipts[0].error

    def test_installs_each_hook_type(self, repo: Path):
        profile = _profile(hook_types=["pre-commit", "commit-msg"])
        with patch(f"{_RUNNER}.shutil.which", return_value="/usr/bin/pre-commit"), \
             patch(f"{_RUNNER}.run_command", return_value=ok_result()) as mock_run:
            receipts = install_hooks(profile, repo)

        assert all(r.ok for r in receipts)
        cmds = [c.args[0] for c in mock_run.call_args_list]
        assert cmds == [
            ["pre-commit", "install"],
            ["pre-commit", "install", "--hook-type", "commit-msg"],
        ]
        assert mock_run.call_args.kwargs["cwd"] == str(repo)

    def test_stops_at_first_failure(self, repo: Path):
        profile = _profile(hook_types=["pre-commit", "commit-msg"])
        with patch(f"{_RUNNER}.shutil.which", return_value="/usr/bin/pre-commit"), \
             patch(f"{_RUNNER}.run_command", return_value=failed_result("not a git repository")) as mock_run:
            receipts = install_hooks(profile, repo)

        assert mock_run.call_count == 1
        assert receipts[-1].failed
        assert "not a git repository" in receipts[-1].error


class TestRunChecks:
    """Checks run one by one; failures aggregate, nothing stops early."""

    def test_runs_every_check_in_order(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_text(CONFIG)
        profile = _profile(checks=["check-yaml", "black", "trailing-whitespace"])

        def run(cmd, **kwargs):
            return failed_result() if cmd[2] == "black" else ok_result()

        with patch(f"{_RUNNER}.run_command", side_effect=run) as mock_run:
            receipts = run_checks(profile, repo)

        assert [r.target for r in receipts] == ["check-yaml", "black", "trailing-whitespace"]
        assert [r.status for r in receipts] == ["ok", "failed", "ok"]
        assert mock_run.call_args_list[0].args[0] == [
            "pre-commit", "run", "check-yaml", "--all-files",
        ]
        assert mock_run.call_args.kwargs["capture"] is False

    def test_absent_ids_are_skipped(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_text(CONFIG)
        profile = _profile(checks=["check-yaml", "mypy"])

        with patch(f"{_RUNNER}.run_command", return_value=ok_result()) as mock_run:
            receipts = run_checks(profile, repo)

        assert receipts[1].skipped
        assert "not in .pre-commit-config.yaml" in receipts[1].output
        assert mock_run.call_count == 1

    def test_explicit_subset(self, repo: Path):
        (repo / ".pre-commit-config.yaml").write_text(CONFIG)
        profile = _profile(checks=["check-yaml", "black"])
        with patch(f"{_RUNNER}.run_command", return_value=ok_result()):
            receipts = run_checks(profile, repo, checks=["black"])
        assert [r.target for r in receipts] == ["black"]


class TestGitTemplates:
    def test_installs_scripts_and_registers(self, tmp_path: Path):
        template_dir = tmp_path / ".git-templates"
        with patch(f"{_TEMPLATES}.run_command", return_value=ok_result()) as mock_run:
            receipts = register_git_templates(template_dir)

        assert all(r.ok for r in receipts)
        for name in ("pre-commit", "commit-msg"):
            script = template_dir / "hooks" / name
            assert script.read_text().startswith("#!")
            assert script.stat().st_mode & 0o111
        assert mock_run.call_args.args[0] == [
            "git", "config", "--global", "init.templateDir", str(template_dir),
        ]

    def test_second_run_skips_unchanged(self, tmp_path: Path):
        template_dir = tmp_path / ".git-templates"
        with patch(f"{_TEMPLATES}.run_command", return_value=ok_result()):
            register_git_templates(template_dir)
            receipts = register_git_templates(template_dir)
        assert [r.status for r in receipts[:2]] == ["skipped", "skipped"]

    def test_git_config_failure(self, tmp_path: Path):
        with patch(f"{_TEMPLATES}.run_command", return_value=failed_result("no git")):
            receipts = register_git_templates(tmp_path / "t")
        assert receipts[-1].failed
        assert receipts[-1].target == "init.templateDir"


class TestCommitlint:
    def test_already_installed(self):
        with patch(f"{_LINT}.shutil.which", return_value="/usr/bin/commitlint"):
            assert ensure_commitlint(CommitlintSettings()).skipped

    def test_auto_install_disabled(self):
        with patch(f"{_LINT}.shutil.which", return_value=None):
            r = ensure_commitlint(CommitlintSettings(auto_install=False))
        assert r.skipped
        assert r.output == "auto-install disabled"

    def test_npm_install(self):
        def which(name):
            return "/usr/bin/npm" if name == "npm" else None

        with patch(f"{_LINT}.shutil.which", side_effect=which), \
             patch(f"{_LINT}.run_command", return_value=ok_result()) as mock_run:
            r = ensure_commitlint(CommitlintSettings())
        assert r.ok
        assert mock_run.call_args.args[0] == [
            "npm", "install", "-g", "@commitlint/cli", "@commitlint/config-conventional",
        ]

    def test_npm_failure_is_reported(self):
        def which(name):
            return "/usr/bin/npm" if name == "npm" else None

        with patch(f"{_LINT}.shutil.which", side_effect=which), \
             patch(f"{_LINT}.run_command", return_value=failed_result("EACCES")):
            r = ensure_commitlint(CommitlintSettings())
        assert r.failed
        assert "EACCES" in r.error

    def test_lint_message_pipes_message(self, repo: Path):
        msg = repo / "COMMIT_EDITMSG"
        msg.write_text("feat(api): add retries\n")

        def run(cmd, **kwargs):
            if cmd[:2] == ["git", "rev-parse"]:
                return ok_result(f"{repo}\n")
            return ok_result()

        with patch(f"{_LINT}.shutil.which", return_value="/usr/bin/commitlint"), \
             patch(f"{_LINT}.run_command", side_effect=run) as mock_run:
            result = lint_message(msg, CommitlintSettings())

        assert result.ok
        assert result.config_created
        assert (repo / "commitlint.config.js").is_file()
        assert mock_run.call_args.kwargs["input_text"] == "feat(api): add retries\n"

    def test_lint_message_rejects(self, repo: Path):
        msg = repo / "COMMIT_EDITMSG"
        msg.write_text("did stuff\n")
        (repo / "commitlint.config.js").write_text("module.exports = {};\n")

        def run(cmd, **kwargs):
            if cmd[:2] == ["git", "rev-parse"]:
                return ok_result(f"{repo}\n")
            return failed_result("subject may not be empty")

        with patch(f"{_LINT}.shutil.which", return_value="/usr/bin/commitlint"), \
             patch(f"{_LINT}.run_command", side_effect=run):
            result = lint_message(msg, CommitlintSettings())

        assert not result.ok
        assert not result.config_created
        assert "subject may not be empty" in result.output
        assert (repo / "commitlint.config.js").read_text() == "module.exports = {};\n"

    def test_lint_without_commitlint(self, repo: Path):
        msg = repo / "COMMIT_EDITMSG"
        msg.write_text("feat: x\n")
        with patch(f"{_LINT}.shutil.which", return_value=None), \
             patch(f"{_LINT}.run_command", return_value=ok_result(f"{repo}\n")):
            result = lint_message(msg, CommitlintSettings(auto_install=False))
        assert not result.ok
        assert "commitlint is not installed" in result.error

    def test_guide_lists_every_type(self):
        guide = conventional_guide()
        for type_name, _ in CONVENTIONAL_TYPES:
            assert type_name in guide
        assert "feat(auth): add password reset functionality" in guide
