"""Shared runtime bootstrap helpers for CLI entrypoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import typer

from dayboard.cli.console import error, show_notices
from dayboard.config import ConfigError, DayboardConfig, load_config
from dayboard.logging import configure_logging
from dayboard.todos import TodoManager, create_todo_manager

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CliRuntime:
    """Lazily composed dependencies for CLI command handlers."""

    config_path: Path | None = None
    verbose: bool = False
    _config: DayboardConfig | None = field(default=None, repr=False)
    _manager: TodoManager | None = field(default=None, repr=False)

    @property
    def config(self) -> DayboardConfig:
        if self._config is None:
            self._config = bootstrap_config(self.config_path, verbose=self.verbose)
        return self._config

    @property
    def manager(self) -> TodoManager:
        if self._manager is None:
            self._manager = create_todo_manager(self.config)
            show_notices(self._manager.notices)
        return self._manager


def bootstrap_config(path: Path | None, *, verbose: bool = False) -> DayboardConfig:
    """Load config and configure logging, exiting with a message on failure."""
    try:
        config = load_config(path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1) from None

    configure_logging(
        level="DEBUG" if verbose else config.log_level,
        use_rich=True,
        log_to_file=config.log_to_file,
    )
    logger.debug("Configuration loaded", extra={"backend": config.storage.backend})
    return config


def get_runtime(ctx: typer.Context) -> CliRuntime:
    """Return the runtime attached by the root callback (or a default one)."""
    runtime = ctx.find_root().obj
    if not isinstance(runtime, CliRuntime):
        runtime = CliRuntime()
        ctx.find_root().obj = runtime
    return runtime
