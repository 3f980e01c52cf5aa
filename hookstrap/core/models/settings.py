"""
Settings model — user-level knobs loaded from hookstrap.yml.

Every field has a default, so an absent settings file is the same as
an empty one.  Paths are stored as written (``~`` allowed) and
expanded through the ``*_path`` helpers at the point of use.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class VersionManagerSettings(BaseModel):
    """Where and how the version manager (asdf) is fetched."""

    install_dir: str = "~/.asdf"
    bin_dir: str = "~/bin"
    clone_url: str = "https://github.com/asdf-vm/asdf.git"
    clone_branch: str = "master"
    archive_version: str = "v0.18.0"
    archive_url: str = (
        "https://github.com/asdf-vm/asdf/releases/download/"
        "{version}/asdf-{version}-{os}-{arch}.tar.gz"
    )
    variant: Literal["clone", "archive"] | None = None   # overrides the profile's clone/archive choice

    @property
    def install_path(self) -> Path:
        return Path(self.install_dir).expanduser()

    @property
    def bin_path(self) -> Path:
        return Path(self.bin_dir).expanduser()


class CommitlintSettings(BaseModel):
    auto_install: bool = True
    packages: list[str] = Field(
        default_factory=lambda: ["@commitlint/cli", "@commitlint/config-conventional"],
    )


class Settings(BaseModel):
    """Root settings object.

    Attributes:
        ledger_path:      Flat ``tool version`` ledger (asdf global file).
        git_template_dir: Directory registered as ``init.templateDir``.
        hook_runner:      Hook runner executable.
        tool_versions:    Per-tool version overrides (``gitleaks: 8.22.0``).
        plugin_sources:   Extra or replacement plugin URLs by tool name.
    """

    ledger_path: str = "~/.tool-versions"
    git_template_dir: str = "~/.git-templates"
    hook_runner: str = "pre-commit"

    version_manager: VersionManagerSettings = Field(default_factory=VersionManagerSettings)
    commitlint: CommitlintSettings = Field(default_factory=CommitlintSettings)

    tool_versions: dict[str, str] = Field(default_factory=dict)
    plugin_sources: dict[str, str] = Field(default_factory=dict)

    @property
    def ledger_file(self) -> Path:
        return Path(self.ledger_path).expanduser()

    @property
    def git_template_path(self) -> Path:
        return Path(self.git_template_dir).expanduser()
