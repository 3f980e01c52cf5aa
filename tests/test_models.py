"""
Tests for domain models — Receipt, ToolSpec, ProfileConfig, Settings.
"""

import pytest
from pydantic import ValidationError

from hookstrap.core.models import (
    ArtifactSpec,
    ProfileConfig,
    ProfileName,
    Receipt,
    Settings,
    ToolSpec,
)


class TestReceipt:
    """Tests for the step result contract."""

    def test_success(self):
        r = Receipt.success("tools", "gitleaks", output="8.21.0")
        assert r.ok
        assert not r.failed
        assert r.output == "8.21.0"

    def test_failure(self):
        r = Receipt.failure("tools", "gitleaks", error="no plugin")
        assert r.failed
        assert r.error == "no plugin"

    def test_skip_keeps_reason_as_output(self):
        r = Receipt.skip("config", ".pre-commit-config.yaml", reason="already exists")
        assert r.skipped
        assert r.output == "already exists"

    def test_serializes(self):
        r = Receipt.success("hooks_run", "black", metadata={"n": 1})
        data = r.model_dump(mode="json")
        assert data["step"] == "hooks_run"
        assert data["target"] == "black"
        assert data["status"] == "ok"


class TestToolSpec:
    def test_defaults_to_latest(self):
        spec = ToolSpec(name="terraform")
        assert spec.is_latest

    def test_exact_version(self):
        assert not ToolSpec(name="gitleaks", version="8.21.0").is_latest

    def test_frozen(self):
        spec = ToolSpec(name="gitleaks", version="8.21.0")
        with pytest.raises(ValidationError):
            spec.version = "8.22.0"


class TestProfileConfig:
    """Tests for profile validation."""

    def test_minimal(self):
        p = ProfileConfig(name="python")
        assert p.name is ProfileName.PYTHON
        assert p.hook_types == ["pre-commit"]
        assert not p.manages_toolchains

    def test_duplicate_tool_rejected(self):
        with pytest.raises(ValidationError, match="duplicate tool names"):
            ProfileConfig(
                name="golang",
                tools=[ToolSpec(name="gitleaks"), ToolSpec(name="gitleaks", version="1")],
            )

    def test_optional_clashing_with_mandatory_rejected(self):
        with pytest.raises(ValidationError, match="nodejs"):
            ProfileConfig(
                name="golang",
                tools=[ToolSpec(name="nodejs")],
                optional_tools=["nodejs"],
            )

    def test_duplicate_artifact_target_rejected(self):
        with pytest.raises(ValidationError):
            ProfileConfig(
                name="typescript",
                artifacts=[
                    ArtifactSpec(template="a", target=".eslintrc.json"),
                    ArtifactSpec(template="b", target=".eslintrc.json"),
                ],
            )

    def test_unknown_profile_name_rejected(self):
        with pytest.raises(ValidationError):
            ProfileConfig(name="rust")

    def test_extra_hook_types(self):
        p = ProfileConfig(name="golang", hook_types=["pre-commit", "commit-msg"])
        assert p.extra_hook_types == ["commit-msg"]


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.ledger_path == "~/.tool-versions"
        assert s.version_manager.archive_version == "v0.18.0"
        assert s.version_manager.clone_branch == "master"
        assert s.commitlint.auto_install is True

    def test_paths_expand_home(self, home):
        s = Settings()
        assert s.ledger_file == home / ".tool-versions"
        assert s.version_manager.install_path == home / ".asdf"

    @pytest.mark.parametrize("variant", ["clone", "archive", None])
    def test_variant_accepted(self, variant):
        assert Settings(version_manager={"variant": variant}).version_manager.variant == variant

    @pytest.mark.parametrize("variant", ["Clone", "tarball", ""])
    def test_variant_rejected(self, variant):
        with pytest.raises(ValidationError):
            Settings(version_manager={"variant": variant})
