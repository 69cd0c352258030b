"""Centralized path management for Dayboard.

All state (config, todo data, logs) is stored under a single base directory.
The base directory can be overridden with the DAYBOARD_HOME environment variable.

Default locations:
- Linux/macOS: ~/.dayboard
- Windows: %USERPROFILE%\\.dayboard
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "DAYBOARD_HOME"


@lru_cache(maxsize=1)
def get_dayboard_home() -> Path:
    """Get the base directory for all Dayboard data.

    Resolution order:
    1. DAYBOARD_HOME environment variable (if set)
    2. Platform default (~/.dayboard)

    Returns:
        Path to the Dayboard home directory.
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".dayboard"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_dayboard_home() / "config.toml"


def get_data_path() -> Path:
    """Get the data directory path (one JSON file per storage key)."""
    return get_dayboard_home() / "data"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_dayboard_home() / "logs"


def get_all_paths() -> dict[str, Path]:
    """Get all standard paths for debugging/display."""
    return {
        "home": get_dayboard_home(),
        "config": get_config_path(),
        "data": get_data_path(),
        "logs": get_logs_path(),
    }
