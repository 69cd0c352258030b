"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dayboard.config.models import ConfigError, DayboardConfig
from dayboard.config.paths import get_config_path

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "DAYBOARD_STORAGE_PATH": ("storage", "path"),
    "DAYBOARD_LOG_LEVEL": (None, "log_level"),
}


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.dayboard/config.toml (or DAYBOARD_HOME)
        Path("/etc/dayboard/config.toml"),  # System-wide
    ]


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides on top of file values."""
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if not value:
            continue
        if section is None:
            config[key] = value
        else:
            target = config.get(section)
            if not isinstance(target, dict):
                target = {}
                config[section] = target
            target[key] = value
    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Resolve which config file to read.

    Raises:
        FileNotFoundError: If an explicit path was given and does not exist.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> DayboardConfig:
    """Load configuration from TOML file.

    Unlike an explicit path, a missing default config is not an error:
    Dayboard runs fine on defaults.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated DayboardConfig instance.

    Raises:
        FileNotFoundError: If an explicit config file is not found.
        ConfigError: If the config file is invalid.
    """
    config_path = find_config_path(path)

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        logger.debug("Loaded config", extra={"path": str(config_path)})

    raw_config = _apply_env_overrides(raw_config)

    try:
        return DayboardConfig.model_validate(raw_config)
    except ValidationError as e:
        source = config_path or "environment"
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e
