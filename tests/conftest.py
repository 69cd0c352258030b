"""Shared test fixtures and factories."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.logging import RichHandler

from dayboard.config.paths import ENV_VAR, get_dayboard_home
from dayboard.logging import JSONLHandler
from dayboard.todos import MemoryKeyValueStore, TodoManager, TodoStorage
from dayboard.todos.types import Tag, Todo

# 2024-05-01T00:00:00Z
BASE_TS = 1714521600.0


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = BASE_TS) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """CLI commands reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, RichHandler | JSONLHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def dayboard_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point DAYBOARD_HOME at a temp dir and run from inside it."""
    home = tmp_path / "home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("DAYBOARD_STORAGE_PATH", raising=False)
    monkeypatch.delenv("DAYBOARD_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    get_dayboard_home.cache_clear()
    yield home
    get_dayboard_home.cache_clear()


# =============================================================================
# Storage and Manager Fixtures
# =============================================================================


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def storage(kv: MemoryKeyValueStore) -> TodoStorage:
    return TodoStorage(kv)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manager(storage: TodoStorage, clock: FakeClock) -> TodoManager:
    manager = TodoManager(storage, clock=clock)
    manager.load()
    return manager


def make_todo(
    todo_id: int,
    text: str = "task",
    date: str = "2024-05-01",
    *,
    completed: bool = False,
    tags: list[Tag] | None = None,
) -> Todo:
    return Todo(
        id=todo_id,
        text=text,
        date=date,
        completed=completed,
        tags=list(tags or []),
    )


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner(monkeypatch: pytest.MonkeyPatch):
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    from dayboard.cli.console import console

    # The shared console reads COLUMNS once at import time.
    monkeypatch.setattr(console, "width", 160)
    return CliRunner(env={"NO_COLOR": "1", "COLUMNS": "160"})


@pytest.fixture
def todo_factory():
    return make_todo
