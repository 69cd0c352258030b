"""Derived groupings of the todo collection.

Everything here is recomputed from the full collection on each call.
Buckets keep their members in insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from dayboard.todos.types import GroupMode, Tag, Todo, parse_date


def group_by_date(todos: Iterable[Todo]) -> dict[str, list[Todo]]:
    groups: dict[str, list[Todo]] = {}
    for todo in todos:
        groups.setdefault(todo.date, []).append(todo)
    return groups


def group_by_tag(todos: Iterable[Todo]) -> dict[Tag, list[Todo]]:
    """Bucket todos by tag; every Tag has a bucket, untagged todos go to "other"."""
    groups: dict[Tag, list[Todo]] = {tag: [] for tag in Tag}
    for todo in todos:
        for tag in todo.effective_tags:
            groups[tag].append(todo)
    return groups


def sorted_dates(dates: Iterable[str]) -> list[str]:
    """Distinct dates, most recent first."""
    return sorted(set(dates), key=parse_date, reverse=True)


def latest_date(todos: Iterable[Todo]) -> str | None:
    dates = sorted_dates(todo.date for todo in todos)
    return dates[0] if dates else None


@dataclass
class TodoGroups:
    """Both sidebar groupings for one snapshot of the collection."""

    by_date: dict[str, list[Todo]]
    dates: list[str]
    by_tag: dict[Tag, list[Todo]]

    def bucket(self, mode: GroupMode, key: str | None) -> list[Todo]:
        if key is None:
            return []
        if mode == GroupMode.DATE:
            return list(self.by_date.get(key, []))
        try:
            tag = Tag.parse(key)
        except ValueError:
            return []
        return list(self.by_tag[tag])


def compute_groups(todos: Sequence[Todo]) -> TodoGroups:
    by_date = group_by_date(todos)
    return TodoGroups(
        by_date=by_date,
        dates=sorted_dates(by_date),
        by_tag=group_by_tag(todos),
    )
