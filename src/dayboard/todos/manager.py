"""Todo manager: owns the collection and the active selection."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from dayboard.todos.grouping import TodoGroups, compute_groups, latest_date
from dayboard.todos.selection import Selection
from dayboard.todos.storage import TodoStorage, create_storage
from dayboard.todos.types import (
    CorruptStateError,
    GroupMode,
    Tag,
    Todo,
    normalize_date,
)

if TYPE_CHECKING:
    from dayboard.config.models import DayboardConfig

logger = logging.getLogger(__name__)


class TodoManager:
    """Single owner of the todo collection.

    Every mutation that changes the collection is followed by a synchronous
    save of the whole collection.
    """

    def __init__(
        self,
        storage: TodoStorage,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._todos: list[Todo] = []
        self._last_id = 0
        self.selection = Selection()
        self.notices: list[str] = []

    @property
    def todos(self) -> list[Todo]:
        return list(self._todos)

    def load(self) -> None:
        """Read persisted todos and pick the most recent date as the active filter."""
        try:
            loaded = self._storage.load()
        except CorruptStateError as e:
            backup_key = self._storage.quarantine(e.raw)
            logger.warning(
                "Stored todos are unreadable, starting empty",
                extra={"error": str(e), "backup_key": backup_key},
            )
            self.notices.append(
                f"Saved todos could not be read ({e}). "
                f"Starting with an empty list; the old data was kept as '{backup_key}'."
            )
            loaded = None

        self._todos = loaded or []
        self._last_id = max((todo.id for todo in self._todos), default=0)

        if latest := latest_date(self._todos):
            self.selection.select(GroupMode.DATE, latest)

    def add(self, text: str, date: str, tags: Iterable[Tag | str] = ()) -> Todo | None:
        """Append a new todo and switch the view to its date.

        Returns None (and changes nothing) when the text is blank.

        Raises:
            ValueError: Invalid date or unknown tag.
        """
        content = text.strip()
        if not content:
            logger.debug("Ignoring blank todo")
            return None

        todo = Todo(
            id=self._next_id(),
            text=content,
            completed=False,
            date=normalize_date(date),
            tags=[Tag.parse(tag) for tag in tags],
        )
        self._todos.append(todo)
        self._save()
        logger.info("Added todo", extra={"todo_id": todo.id, "date": todo.date})

        self.selection.select(GroupMode.DATE, todo.date)
        return todo

    def toggle_completed(self, todo_id: int) -> Todo | None:
        todo = self.get(todo_id)
        if todo is None:
            logger.debug("Toggle ignored, todo not found", extra={"todo_id": todo_id})
            return None
        todo.completed = not todo.completed
        self._save()
        logger.info(
            "Toggled todo",
            extra={"todo_id": todo_id, "completed": todo.completed},
        )
        return todo

    def delete(self, todo_id: int) -> bool:
        remaining = [todo for todo in self._todos if todo.id != todo_id]
        if len(remaining) == len(self._todos):
            logger.debug("Delete ignored, todo not found", extra={"todo_id": todo_id})
            return False
        self._todos = remaining
        self._save()
        logger.info("Deleted todo", extra={"todo_id": todo_id})
        return True

    def get(self, todo_id: int) -> Todo | None:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def select(self, mode: GroupMode | str, key: str) -> None:
        self.selection.select(mode, key)

    def groups(self) -> TodoGroups:
        return compute_groups(self._todos)

    def visible(self) -> list[Todo]:
        """Todos in the active bucket (empty when nothing is selected)."""
        return self.selection.resolve(self.groups())

    def _next_id(self) -> int:
        now_ms = int(self._clock() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return self._last_id

    def _save(self) -> None:
        self._storage.save(self._todos)


def create_todo_manager(config: DayboardConfig) -> TodoManager:
    """Create a manager from config and load persisted todos."""
    manager = TodoManager(create_storage(config.storage))
    manager.load()
    return manager
