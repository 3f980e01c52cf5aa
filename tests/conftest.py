"""
Shared test fixtures and configuration.
"""

import subprocess
from pathlib import Path

import pytest

from hookstrap.core.data import DataRegistry
from hookstrap.core.models.settings import Settings, VersionManagerSettings
from hookstrap.core.services.toolchain.execution.subprocess_runner import CommandResult


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """A throwaway $HOME so ~ expansion never reaches the real one."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def settings(home: Path) -> Settings:
    """Settings with every path inside the temporary home."""
    return Settings(
        ledger_path=str(home / ".tool-versions"),
        git_template_dir=str(home / ".git-templates"),
        version_manager=VersionManagerSettings(
            install_dir=str(home / ".asdf"),
            bin_dir=str(home / "bin"),
        ),
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """An empty target repository directory."""
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    return repo_dir


@pytest.fixture
def registry() -> DataRegistry:
    return DataRegistry()


def completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    """A CompletedProcess as returned by a patched subprocess.run."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def ok_result(stdout: str = "") -> CommandResult:
    return CommandResult(cmd=["mock"], stdout=stdout)


def failed_result(stderr: str = "boom", returncode: int = 1) -> CommandResult:
    return CommandResult(
        cmd=["mock"],
        returncode=returncode,
        stderr=stderr,
        error=f"Command failed (exit {returncode})",
    )
