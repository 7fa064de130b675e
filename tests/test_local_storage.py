# tests/test_local_storage.py

from __future__ import annotations

from pathlib import Path

from pranav_tasks.core.models import Priority
from pranav_tasks.storage.local_storage import LocalStorage
from pranav_tasks.tasks.task_store import TaskStore


def test_get_set_remove(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "nested" / "ls.sqlite3")

    assert storage.get_item("k") is None

    storage.set_item("k", "one")
    storage.set_item("k", "two")
    assert storage.get_item("k") == "two"
    assert storage.keys() == ["k"]

    storage.remove_item("k")
    assert storage.get_item("k") is None
    storage.remove_item("k")


def test_values_survive_reopen(tmp_path: Path) -> None:
    path = tmp_path / "ls.sqlite3"
    LocalStorage(path).set_item("pranav_tasks", "[]")

    assert LocalStorage(path).get_item("pranav_tasks") == "[]"


def test_task_store_round_trip_through_sqlite(sqlite_storage: LocalStorage) -> None:
    store = TaskStore(sqlite_storage)
    milk = store.add("Buy milk")
    taxes = store.add("Pay taxes", Priority.HIGH)
    assert milk and taxes
    store.toggle(milk.id)

    reopened = TaskStore(LocalStorage(sqlite_storage.db_path))

    assert [(t.text, t.priority, t.completed) for t in reopened.tasks] == [
        ("Pay taxes", Priority.HIGH, False),
        ("Buy milk", Priority.LOW, True),
    ]


def test_garbage_in_sqlite_starts_empty(sqlite_storage: LocalStorage) -> None:
    sqlite_storage.set_item("pranav_tasks", "<<<garbage>>>")

    store = TaskStore(sqlite_storage)

    assert len(store) == 0
    store.add("fresh start")
    assert TaskStore(sqlite_storage).tasks[0].text == "fresh start"
