"""Todo subsystem public types."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Tag(StrEnum):
    """Closed set of category labels a todo can carry."""

    CLOTHING = "clothing"
    FOOD = "food"
    HOUSING = "housing"
    TRANSPORT = "transport"
    OTHER = "other"

    @classmethod
    def selectable(cls) -> list[Tag]:
        """Labels offered in the add form; "other" is only implied by no tags."""
        return [tag for tag in cls if tag is not cls.OTHER]

    @classmethod
    def parse(cls, value: str | Tag) -> Tag:
        if isinstance(value, Tag):
            return value
        raw = str(value).strip()
        if raw in LEGACY_TAG_LABELS:
            return LEGACY_TAG_LABELS[raw]
        try:
            return cls(raw.lower())
        except ValueError:
            choices = ", ".join(tag.value for tag in cls)
            raise ValueError(f"unknown tag {raw!r} (choose from: {choices})") from None


# Labels written by earlier versions of the data file
LEGACY_TAG_LABELS: dict[str, Tag] = {
    "衣": Tag.CLOTHING,
    "食": Tag.FOOD,
    "住": Tag.HOUSING,
    "行": Tag.TRANSPORT,
    "其他": Tag.OTHER,
}


class GroupMode(StrEnum):
    """How the sidebar groups todos."""

    DATE = "date"
    TAG = "tag"


class TodoError(Exception):
    """Base error for the todo subsystem."""


class CorruptStateError(TodoError):
    """Persisted todo content could not be decoded."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


def parse_date(value: str | date) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date."""
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _ISO_DATE.match(text):
        raise ValueError(f"invalid date {value!r} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"invalid date {value!r} (expected YYYY-MM-DD)") from None


def normalize_date(value: str | date) -> str:
    return parse_date(value).isoformat()


@dataclass
class Todo:
    """A single todo item."""

    id: int
    text: str
    date: str
    completed: bool = False
    tags: list[Tag] = field(default_factory=list)

    @property
    def effective_tags(self) -> list[Tag]:
        """Tags used for grouping: deduplicated, or ``[other]`` when untagged."""
        if not self.tags:
            return [Tag.OTHER]
        return list(dict.fromkeys(self.tags))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "date": self.date,
            "tags": [tag.value for tag in self.tags],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Todo:
        """Build a Todo from its persisted form.

        Raises:
            KeyError: A required field is missing.
            ValueError: A field has the wrong type or an invalid value.
        """
        if not isinstance(data, dict):
            raise ValueError(f"todo record must be an object, got {type(data).__name__}")

        todo_id = data["id"]
        if isinstance(todo_id, bool) or not isinstance(todo_id, int):
            raise ValueError(f"todo id must be an integer, got {todo_id!r}")

        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"todo {todo_id} has empty text")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"todo {todo_id} has non-boolean completed flag")

        tags = data.get("tags", [])
        if not isinstance(tags, list):
            raise ValueError(f"todo {todo_id} tags must be a list")

        return cls(
            id=todo_id,
            text=text.strip(),
            completed=completed,
            date=normalize_date(data["date"]),
            tags=[Tag.parse(tag) for tag in tags],
        )
