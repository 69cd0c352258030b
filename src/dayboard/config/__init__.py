"""Configuration module."""

from dayboard.config.loader import load_config
from dayboard.config.models import (
    ConfigError,
    DayboardConfig,
    DisplayConfig,
    StorageConfig,
)
from dayboard.config.paths import (
    get_config_path,
    get_data_path,
    get_dayboard_home,
    get_logs_path,
)
from dayboard.config.writer import write_config_template

__all__ = [
    "ConfigError",
    "DayboardConfig",
    "DisplayConfig",
    "StorageConfig",
    "get_config_path",
    "get_data_path",
    "get_dayboard_home",
    "get_logs_path",
    "load_config",
    "write_config_template",
]
