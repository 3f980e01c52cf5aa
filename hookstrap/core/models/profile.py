"""
Profile model — one ecosystem bootstrap variant.

Profiles are declared in ``core/data/catalogs/profiles.json`` and
validated into these models once per selection.  A profile fixes what
the run requires on PATH, which toolchains the version manager pins,
which config artifacts are emitted and which hook ids are exercised.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProfileName(str, Enum):
    """The ecosystems hookstrap knows how to bootstrap."""

    GLOBAL = "global"
    GOLANG = "golang"
    PYTHON = "python"
    TERRAFORM = "terraform"
    TYPESCRIPT = "typescript"


class ToolSpec(BaseModel):
    """A toolchain pinned through the version manager."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "latest"          # "latest" or an exact version string
    plugin_url: str | None = None    # None = look up in the plugin catalog

    @property
    def is_latest(self) -> bool:
        return self.version == "latest"


class ArtifactSpec(BaseModel):
    """A config file rendered from a packaged template.

    Attributes:
        template: Resource path under ``core/data/templates/``.
        target:   Fixed filename, relative to the target repository root.
        reason:   Why the file exists (shown in reports).
    """

    model_config = ConfigDict(frozen=True)

    template: str
    target: str
    reason: str = ""


class ProfileConfig(BaseModel):
    """Everything a bootstrap run needs to know about one profile."""

    model_config = ConfigDict(frozen=True)

    name: ProfileName
    description: str = ""

    requires: list[str] = Field(default_factory=list)
    version_manager: Literal["clone", "archive"] = "archive"
    tools: list[ToolSpec] = Field(default_factory=list)
    optional_tools: list[str] = Field(default_factory=list)

    artifacts: list[ArtifactSpec] = Field(default_factory=list)
    hook_types: list[str] = Field(default_factory=lambda: ["pre-commit"])
    checks: list[str] = Field(default_factory=list)
    register_git_templates: bool = False

    @model_validator(mode="after")
    def _unique_tool_names(self) -> ProfileConfig:
        names = [t.name for t in self.tools] + list(self.optional_tools)
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate tool names in profile: {', '.join(dupes)}")
        targets = [a.target for a in self.artifacts]
        if len(set(targets)) != len(targets):
            raise ValueError("artifact targets must be unique within a profile")
        return self

    @property
    def manages_toolchains(self) -> bool:
        """Whether this profile drives the version manager at all."""
        return bool(self.tools or self.optional_tools)

    @property
    def extra_hook_types(self) -> list[str]:
        """Hook types installed on top of the default ``pre-commit``."""
        return [t for t in self.hook_types if t != "pre-commit"]
