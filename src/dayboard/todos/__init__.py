"""Todo subsystem public API.

Public API:
- TodoManager: Owns the collection and the active selection
- create_todo_manager: Factory function

Types:
- Todo, Tag, GroupMode, TodoGroups, Selection
"""

from dayboard.todos.grouping import (
    TodoGroups,
    compute_groups,
    group_by_date,
    group_by_tag,
    latest_date,
    sorted_dates,
)
from dayboard.todos.manager import TodoManager, create_todo_manager
from dayboard.todos.selection import Selection
from dayboard.todos.storage import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    TodoStorage,
    create_storage,
)
from dayboard.todos.types import (
    CorruptStateError,
    GroupMode,
    Tag,
    Todo,
    TodoError,
    normalize_date,
    parse_date,
)

__all__ = [
    "CorruptStateError",
    "FileKeyValueStore",
    "GroupMode",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "Selection",
    "Tag",
    "Todo",
    "TodoError",
    "TodoGroups",
    "TodoManager",
    "TodoStorage",
    "compute_groups",
    "create_storage",
    "create_todo_manager",
    "group_by_date",
    "group_by_tag",
    "latest_date",
    "normalize_date",
    "parse_date",
    "sorted_dates",
]
