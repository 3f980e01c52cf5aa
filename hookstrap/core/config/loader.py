"""
Settings loader — reads hookstrap.yml into the Settings model.

Lookup order:
    --config / HOOKSTRAP_CONFIG  >  hookstrap.yml (walking up from cwd)
    >  ~/.config/hookstrap/config.yml  >  built-in defaults

A missing file is not an error: every setting has a default.  A file
that exists but cannot be parsed or validated is.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from hookstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "hookstrap.yml"
USER_SETTINGS_FILE = Path("~/.config/hookstrap/config.yml")
ENV_CONFIG = "HOOKSTRAP_CONFIG"


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for hookstrap.yml starting from the given directory, walking up.

    Falls back to the per-user config file when no project-level file
    is found.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the settings file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    user_file = USER_SETTINGS_FILE.expanduser()
    if user_file.is_file():
        return user_file
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file.  If None, ``HOOKSTRAP_CONFIG`` and
            then the discovery walk are used.

    Returns:
        Validated Settings model (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None and os.environ.get(ENV_CONFIG):
        path = Path(os.environ[ENV_CONFIG])
        explicit = True
    if path is None:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return Settings()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "hookstrap" key or be flat
    settings_data = data.get("hookstrap", data)

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
