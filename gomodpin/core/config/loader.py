"""
Configuration loader — reads .gomodpin.yml into PinSettings.

The file is optional. When no path is given, the loader walks up from
the manifest's directory; if nothing is found the built-in defaults
apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from gomodpin.core.errors import ConfigError
from gomodpin.core.models.settings import PinSettings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".gomodpin.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .gomodpin.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to .gomodpin.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, start_dir: Path | None = None) -> PinSettings:
    """Load and validate pin settings.

    Args:
        path: Explicit path to a settings file. Must exist when given.
        start_dir: Where to start the upward search when ``path`` is None.

    Returns:
        Validated PinSettings (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No %s found — using defaults", CONFIG_FILE)
            return PinSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

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
        return PinSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "gomodpin" key or be flat
    if "gomodpin" in data:
        data = data["gomodpin"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'gomodpin' in {path}")

    try:
        settings = PinSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded settings from %s (%d extra excludes, defaults %s)",
        path, len(settings.exclude), "on" if settings.use_default_excludes else "off",
    )
    return settings
