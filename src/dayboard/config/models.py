"""Configuration models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from dayboard.config.paths import get_data_path

# Placeholders understood by DisplayConfig.date_format
DATE_FORMAT_FIELDS = ("weekday", "month", "day", "year")
DEFAULT_DATE_FORMAT = "{weekday}, {month} {day}"


class StorageConfig(BaseModel):
    """Configuration for the todo storage slot.

    The "file" backend keeps one JSON file per key under ``path``.
    The "memory" backend keeps nothing between runs (useful for demos).
    """

    backend: Literal["file", "memory"] = "file"
    path: Path = Field(default_factory=get_data_path)
    key: str = "todos"

    @field_validator("key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        value = value.strip()
        if not value or "/" in value or "\\" in value or value.startswith("."):
            raise ValueError(f"invalid storage key: {value!r}")
        return value


class DisplayConfig(BaseModel):
    """Configuration for terminal rendering."""

    # Fields: {weekday}, {month}, {day}, {year}
    date_format: str = DEFAULT_DATE_FORMAT
    max_text_width: int = Field(default=60, ge=10)

    @field_validator("date_format")
    @classmethod
    def _validate_date_format(cls, value: str) -> str:
        sample = {name: name for name in DATE_FORMAT_FIELDS}
        try:
            value.format(**sample)
        except (KeyError, IndexError, ValueError) as e:
            allowed = ", ".join(f"{{{name}}}" for name in DATE_FORMAT_FIELDS)
            raise ValueError(f"date_format may only use {allowed}: {e}") from None
        return value


class ConfigError(Exception):
    """Configuration error."""


class DayboardConfig(BaseModel):
    """Root configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_to_file: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value
