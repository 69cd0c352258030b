"""Tests for the todo manager (collection owner)."""

import json
import logging

import pytest

from dayboard.config.models import DayboardConfig, StorageConfig
from dayboard.todos import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    TodoManager,
    TodoStorage,
    create_todo_manager,
)
from dayboard.todos.types import GroupMode, Tag


def test_add_selects_new_date(manager, storage):
    todo = manager.add("Buy milk", "2024-05-01", ["food"])

    assert todo is not None
    assert len(manager.todos) == 1
    assert manager.selection.mode == GroupMode.DATE
    assert manager.selection.key == "2024-05-01"
    assert manager.visible() == [todo]
    assert storage.load() == [todo]


def test_add_trims_and_defaults(manager):
    todo = manager.add("  Pay rent  ", "2024-05-02")
    assert todo.text == "Pay rent"
    assert todo.completed is False
    assert todo.tags == []


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_add_is_noop(manager, kv, text):
    manager.select(GroupMode.TAG, "food")

    assert manager.add(text, "2024-05-01") is None
    assert manager.todos == []
    assert "todos" not in kv.data
    assert manager.selection.mode == GroupMode.TAG


def test_collection_size_counts_non_blank_adds(manager):
    texts = ["a", "", "b", "  ", "c"]
    for text in texts:
        manager.add(text, "2024-05-01")
    assert len(manager.todos) == 3


def test_add_rejects_invalid_date_and_tag(manager):
    with pytest.raises(ValueError, match="invalid date"):
        manager.add("x", "2024-13-01")
    with pytest.raises(ValueError, match="unknown tag"):
        manager.add("x", "2024-05-01", ["hobby"])
    assert manager.todos == []


def test_ids_are_timestamp_based_and_unique(manager, clock):
    first = manager.add("a", "2024-05-01")
    second = manager.add("b", "2024-05-01")  # same millisecond
    clock.advance(5)
    third = manager.add("c", "2024-05-01")

    assert first.id == int(clock.now * 1000) - 5000
    assert second.id == first.id + 1
    assert third.id == int(clock.now * 1000)


def test_ids_never_reused_after_delete(manager, clock):
    first = manager.add("a", "2024-05-01")
    manager.delete(first.id)
    second = manager.add("b", "2024-05-01")
    assert second.id != first.id


def test_ids_continue_after_reload_with_clock_behind(storage, clock, todo_factory):
    storage.save([todo_factory(int(clock.now * 1000) + 10_000)])
    manager = TodoManager(storage, clock=clock)
    manager.load()

    todo = manager.add("later", "2024-05-01")
    assert todo.id == int(clock.now * 1000) + 10_001


def test_toggle_is_involution(manager, storage):
    todo = manager.add("a", "2024-05-01")

    manager.toggle_completed(todo.id)
    assert storage.load()[0].completed is True

    manager.toggle_completed(todo.id)
    assert storage.load()[0].completed is False


def test_toggle_only_changes_completed(manager):
    todo = manager.add("a", "2024-05-01", ["food"])
    before = todo.to_dict()
    manager.toggle_completed(todo.id)
    after = manager.get(todo.id).to_dict()

    assert after.pop("completed") is True
    before.pop("completed")
    assert after == before


def test_toggle_missing_is_noop(manager, kv):
    assert manager.toggle_completed(42) is None
    assert "todos" not in kv.data


def test_delete_is_idempotent(manager, storage):
    keep = manager.add("keep", "2024-05-01")
    drop = manager.add("drop", "2024-05-01")

    assert manager.delete(drop.id) is True
    assert manager.delete(drop.id) is False
    assert manager.todos == [keep]
    assert storage.load() == [keep]


def test_load_selects_latest_date(storage, clock, todo_factory):
    storage.save(
        [
            todo_factory(1, date="2024-05-01"),
            todo_factory(2, date="2024-05-03"),
            todo_factory(3, date="2024-05-02"),
        ]
    )
    manager = TodoManager(storage, clock=clock)
    manager.load()

    assert manager.selection.mode == GroupMode.DATE
    assert manager.selection.key == "2024-05-03"
    assert [t.id for t in manager.visible()] == [2]


def test_load_empty_has_no_selection(manager):
    assert manager.selection.key is None
    assert manager.visible() == []
    assert manager.notices == []


def test_load_corrupt_state_falls_back(clock, caplog):
    kv = MemoryKeyValueStore({"todos": "{not json"})
    manager = TodoManager(TodoStorage(kv), clock=clock)

    with caplog.at_level(logging.WARNING, logger="dayboard.todos.manager"):
        manager.load()

    assert manager.todos == []
    assert manager.selection.key is None
    assert len(manager.notices) == 1
    assert "todos.corrupt" in manager.notices[0]
    assert kv.data["todos.corrupt"] == "{not json"
    assert "unreadable" in caplog.text

    manager.add("fresh start", "2024-05-01")
    assert json.loads(kv.data["todos"])[0]["text"] == "fresh start"
    assert kv.data["todos.corrupt"] == "{not json"


def test_load_undecodable_file_falls_back(tmp_path, clock):
    (tmp_path / "todos.json").write_bytes(b"\xff\xff garbage")
    manager = TodoManager(TodoStorage(FileKeyValueStore(tmp_path)), clock=clock)

    manager.load()

    assert manager.todos == []
    assert len(manager.notices) == 1
    assert (tmp_path / "todos.corrupt.json").read_bytes() == b"\xff\xff garbage"

    manager.add("fresh start", "2024-05-01")
    stored = json.loads((tmp_path / "todos.json").read_text(encoding="utf-8"))
    assert [record["text"] for record in stored] == ["fresh start"]


def test_todos_returns_copy(manager):
    manager.add("a", "2024-05-01")
    manager.todos.clear()
    assert len(manager.todos) == 1


def test_visible_in_tag_mode(manager):
    food = manager.add("bread", "2024-05-01", [Tag.FOOD, Tag.TRANSPORT])
    manager.add("socks", "2024-05-02", [Tag.CLOTHING])
    untagged_a = manager.add("call mum", "2024-05-02")
    untagged_b = manager.add("read", "2024-05-03")

    manager.select(GroupMode.TAG, "transport")
    assert manager.visible() == [food]

    manager.select(GroupMode.TAG, "other")
    assert manager.visible() == [untagged_a, untagged_b]


def test_add_after_tag_view_switches_back_to_date(manager):
    manager.add("a", "2024-05-01")
    manager.select(GroupMode.TAG, "food")
    manager.add("b", "2024-04-01")
    assert (manager.selection.mode, manager.selection.key) == (
        GroupMode.DATE,
        "2024-04-01",
    )


def test_mutations_log_at_info(manager, caplog):
    with caplog.at_level(logging.INFO, logger="dayboard.todos.manager"):
        todo = manager.add("a", "2024-05-01")
        manager.toggle_completed(todo.id)
        manager.delete(todo.id)

    messages = [
        r.getMessage() for r in caplog.records if r.name == "dayboard.todos.manager"
    ]
    assert messages == ["Added todo", "Toggled todo", "Deleted todo"]


def test_create_todo_manager_uses_config(tmp_path, todo_factory):
    config = DayboardConfig(storage=StorageConfig(path=tmp_path, key="todos"))
    (tmp_path / "todos.json").write_text(
        json.dumps([todo_factory(5, date="2024-05-03").to_dict()])
    )

    manager = create_todo_manager(config)

    assert [t.id for t in manager.todos] == [5]
    assert manager.selection.key == "2024-05-03"
