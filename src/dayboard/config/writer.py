"""Configuration template writer.

Uses tomlkit so the generated config.toml carries comments that explain
each setting.
"""

import logging
from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument, comment, nl, table

from dayboard.config.models import DayboardConfig
from dayboard.config.paths import get_config_path

logger = logging.getLogger(__name__)


def build_config_document(config: DayboardConfig | None = None) -> TOMLDocument:
    """Build a commented TOML document from a config (defaults if None)."""
    config = config or DayboardConfig()

    doc = tomlkit.document()
    doc.add(comment("Dayboard configuration"))
    doc.add(nl())
    doc["log_level"] = config.log_level
    doc["log_to_file"] = config.log_to_file

    storage = table()
    storage.add(comment('"file" keeps todos on disk, "memory" forgets them on exit'))
    storage["backend"] = config.storage.backend
    storage["path"] = str(config.storage.path)
    storage["key"] = config.storage.key
    doc["storage"] = storage

    display = table()
    display.add(comment("Fields: {weekday}, {month}, {day}, {year}"))
    display["date_format"] = config.display.date_format
    display["max_text_width"] = config.display.max_text_width
    doc["display"] = display

    return doc


def write_config_template(
    config_path: Path | None = None,
    config: DayboardConfig | None = None,
) -> Path:
    """Write a default config file.

    Raises:
        FileExistsError: If the file already exists.
    """
    config_path = config_path or get_config_path()
    if config_path.exists():
        raise FileExistsError(f"Config file already exists at {config_path}")

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(tomlkit.dumps(build_config_document(config)))
    logger.debug(f"Wrote config template to {config_path}")
    return config_path
