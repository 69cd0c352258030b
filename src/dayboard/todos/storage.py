"""Todo persistence.

The whole todo collection lives in a single named slot of a key-value
store, serialized as a JSON array of records::

    [{"id": 1714521600000, "text": "Buy milk", "completed": false,
      "date": "2024-05-01", "tags": ["food"]}]

The key-value store is injected, so tests (and the "memory" backend) can
swap the on-disk files for a dict.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from dayboard.todos.types import CorruptStateError, Todo

if TYPE_CHECKING:
    from dayboard.config.models import StorageConfig

logger = logging.getLogger(__name__)

DEFAULT_KEY = "todos"
CORRUPT_SUFFIX = ".corrupt"


class KeyValueStore(Protocol):
    """Durable string slots addressed by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class FileKeyValueStore:
    """File-based key-value store.

    Each key gets a separate file at ``<directory>/<key>.json``.
    Uses atomic writes (write to temp file, then rename) for safety.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def path_for(self, key: str) -> Path:
        safe_name = key.replace("/", "_").replace("\\", "_")
        return self._directory / f"{safe_name}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        # Undecodable bytes survive as surrogates so they can be quarantined as-is
        return path.read_text(encoding="utf-8", errors="surrogateescape")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file first, then rename (atomic on POSIX)
        temp_file = path.with_suffix(".json.tmp")
        try:
            temp_file.write_text(value, encoding="utf-8", errors="surrogateescape")
            temp_file.replace(path)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise


class MemoryKeyValueStore:
    """In-process key-value store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def encode_todos(todos: Iterable[Todo]) -> str:
    return json.dumps([todo.to_dict() for todo in todos], ensure_ascii=False)


def decode_todos(raw: str) -> list[Todo]:
    """Decode a persisted collection.

    Raises:
        CorruptStateError: The content is not a list of valid todo records.
    """
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CorruptStateError(f"stored todos are not valid UTF-8: {e}", raw) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"stored todos are not valid JSON: {e}", raw) from e

    if not isinstance(data, list):
        raise CorruptStateError(
            f"stored todos must be a list, got {type(data).__name__}", raw
        )

    todos: list[Todo] = []
    seen: set[int] = set()
    for index, item in enumerate(data):
        try:
            todo = Todo.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptStateError(f"stored todo #{index} is invalid: {e}", raw) from e
        if todo.id in seen:
            raise CorruptStateError(f"stored todo id {todo.id} is duplicated", raw)
        seen.add(todo.id)
        todos.append(todo)
    return todos


class TodoStorage:
    """Loads and saves the whole todo collection under one key."""

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self._kv = kv
        self._key = key

    def load(self) -> list[Todo] | None:
        """Read the persisted collection, or None if nothing was ever saved.

        Raises:
            CorruptStateError: The stored content cannot be decoded.
        """
        raw = self._kv.get(self._key)
        if raw is None:
            logger.debug("No stored todos", extra={"key": self._key})
            return None
        todos = decode_todos(raw)
        logger.debug("Loaded todos", extra={"key": self._key, "count": len(todos)})
        return todos

    def save(self, todos: Iterable[Todo]) -> None:
        records = list(todos)
        self._kv.set(self._key, encode_todos(records))
        logger.debug("Saved todos", extra={"key": self._key, "count": len(records)})

    def quarantine(self, raw: str) -> str:
        """Keep unreadable content aside so the next save does not destroy it."""
        backup_key = f"{self._key}{CORRUPT_SUFFIX}"
        self._kv.set(backup_key, raw)
        return backup_key


def create_storage(config: StorageConfig) -> TodoStorage:
    """Build the todo storage described by config."""
    kv: KeyValueStore
    if config.backend == "memory":
        kv = MemoryKeyValueStore()
    else:
        kv = FileKeyValueStore(config.path.expanduser())
    return TodoStorage(kv, key=config.key)
