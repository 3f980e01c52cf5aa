"""
Central data registry for profiles, plugin sources and templates.

Loads the catalogs from ``hookstrap/core/data/catalogs/`` once at first
access and caches them for the process lifetime.  Templates live under
``templates/<profile>/`` and are plain text with ``{slot}`` tokens.

Usage::

    from hookstrap.core.data import get_registry

    registry = get_registry()
    profile = registry.profile("python")        # ProfileConfig
    plugins = registry.plugin_sources           # dict[str, str]
    text = registry.render("python/pre-commit-config.yaml",
                           {"python_version": "3.11"})
"""

from __future__ import annotations

import json
import logging
import re
from functools import cached_property
from pathlib import Path

from pydantic import ValidationError

from hookstrap.core.models.profile import ProfileConfig, ProfileName

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent
TEMPLATE_DIR = _DATA_DIR / "templates"

# A slot is a lowercase identifier in single braces: {python_version}
_SLOT_RE = re.compile(r"\{([a-z][a-z0-9_]*)\}")

# Values a template may ask for.  Rendering rejects anything else.
DECLARED_SLOTS: frozenset[str] = frozenset({"python_version"})


class CatalogError(Exception):
    """Raised when a packaged catalog or template is missing or invalid."""


class TemplateError(CatalogError):
    """Raised when a template names a slot that has no value."""


def _load_json(relative_path: str) -> dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        raise CatalogError(f"Data file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def template_slots(text: str) -> set[str]:
    """Every ``{slot}`` name used in a template body."""
    return set(_SLOT_RE.findall(text))


def render_template(text: str, values: dict[str, str]) -> str:
    """Substitute ``{slot}`` tokens with values.

    Simple string replacement, no Jinja and no escaping.  Braces that
    are not a slot (JSON objects, JS blocks) are left alone.

    Raises:
        TemplateError: A slot is undeclared or has no value.
    """
    slots = template_slots(text)
    undeclared = slots - DECLARED_SLOTS
    if undeclared:
        raise TemplateError(f"Undeclared template slot(s): {', '.join(sorted(undeclared))}")
    missing = slots - set(values)
    if missing:
        raise TemplateError(f"No value for template slot(s): {', '.join(sorted(missing))}")

    rendered = text
    for key in sorted(slots):
        rendered = rendered.replace("{" + key + "}", str(values[key]))
    return rendered


class DataRegistry:
    """Central registry for the static catalogs.

    Each property lazily loads its JSON file on first access and caches
    the result for the lifetime of the instance.
    """

    # ── Profiles ────────────────────────────────────────────────

    @cached_property
    def profiles_raw(self) -> dict[str, dict]:
        data = _load_json("catalogs/profiles.json")
        logger.debug("Loaded %d profile definitions", len(data))
        return data

    @cached_property
    def profiles(self) -> dict[str, ProfileConfig]:
        """Profile name → validated ProfileConfig, in catalog order."""
        result: dict[str, ProfileConfig] = {}
        for name, raw in self.profiles_raw.items():
            try:
                result[name] = ProfileConfig.model_validate({"name": name, **raw})
            except ValidationError as e:
                raise CatalogError(f"Invalid profile '{name}' in catalog: {e}") from e
        return result

    @property
    def profile_names(self) -> list[str]:
        return [p.value for p in ProfileName if p.value in self.profiles]

    def profile(self, name: str | ProfileName) -> ProfileConfig:
        """Look up one profile.

        Raises:
            CatalogError: Unknown profile name.
        """
        key = name.value if isinstance(name, ProfileName) else name
        try:
            return self.profiles[key]
        except KeyError:
            raise CatalogError(
                f"Unknown profile '{key}'. Choose one of: {', '.join(self.profile_names)}"
            ) from None

    # ── Plugin sources ──────────────────────────────────────────

    @cached_property
    def plugin_sources(self) -> dict[str, str]:
        """Tool name → version-manager plugin repository URL."""
        data = _load_json("catalogs/plugins.json")
        logger.debug("Loaded %d plugin sources", len(data))
        return data

    # ── Templates ───────────────────────────────────────────────

    def template_path(self, relative: str) -> Path:
        return TEMPLATE_DIR / relative

    def template_text(self, relative: str) -> str:
        path = self.template_path(relative)
        if not path.is_file():
            raise CatalogError(f"Template not found: {relative}")
        return path.read_text(encoding="utf-8")

    def render(self, relative: str, values: dict[str, str]) -> str:
        """Load and render one template."""
        return render_template(self.template_text(relative), values)


# ── Module-level singleton ──────────────────────────────────────

_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Return the process-wide DataRegistry, creating it on first call."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = DataRegistry()
    return _registry
