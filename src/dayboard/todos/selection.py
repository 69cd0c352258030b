"""Active grouping mode and filter key."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from dayboard.todos.grouping import TodoGroups
from dayboard.todos.types import GroupMode, Tag, Todo, normalize_date


@dataclass
class Selection:
    """Which sidebar entry is active.

    ``key`` is a date string in DATE mode and a tag value in TAG mode.
    """

    mode: GroupMode = GroupMode.DATE
    key: str | None = None

    def select(self, mode: GroupMode | str, key: str) -> None:
        """Set mode and key together.

        Raises:
            ValueError: The key is not a valid date (DATE) or tag (TAG).
        """
        mode = GroupMode(mode)
        if mode == GroupMode.DATE:
            resolved = normalize_date(key)
        else:
            resolved = Tag.parse(key).value
        self.mode = mode
        self.key = resolved

    def is_active(self, mode: GroupMode, key: str) -> bool:
        return self.key is not None and self.mode == mode and self.key == key

    def resolve(self, groups: TodoGroups) -> list[Todo]:
        return groups.bucket(self.mode, self.key)

    def title(self, format_date: Callable[[str], str]) -> str | None:
        if self.key is None:
            return None
        if self.mode == GroupMode.DATE:
            return format_date(self.key)
        return f"{self.key} tag"
