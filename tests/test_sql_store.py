from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskboard.config import Settings
from taskboard.domain.enums import Priority, Status
from taskboard.infra.db import create_db_engine, create_schema, create_session_factory
from taskboard.infra.remote import RemoteError
from taskboard.infra.sql_store import SqlRemoteStore
from taskboard.main import build_service


@pytest.fixture()
def database_url(tmp_path) -> str:
    url = f"sqlite:///{tmp_path / 'board.db'}"
    create_schema(create_db_engine(url))
    return url


@pytest.fixture()
def store(database_url: str) -> SqlRemoteStore:
    return SqlRemoteStore(create_session_factory(create_db_engine(database_url)))


def _new_task(store: SqlRemoteStore, content: str) -> dict:
    return store.insert("tasks", {"content": content, "status": "start", "priority": "normal"})


def test_insert_assigns_id_and_select_returns_rows(store: SqlRemoteStore) -> None:
    first = _new_task(store, "Buy milk")
    second = _new_task(store, "Walk dog")

    assert first["id"] and first["id"] != second["id"]
    assert set(first) == {"id", "content", "status", "priority"}
    rows = store.select("tasks")
    assert [row["content"] for row in rows] == ["Buy milk", "Walk dog"]


def test_update_changes_columns(store: SqlRemoteStore) -> None:
    task = _new_task(store, "Buy milk")

    store.update("tasks", task["id"], {"status": "done", "priority": "urgent"})

    (row,) = store.select("tasks")
    assert row["status"] == "done"
    assert row["priority"] == "urgent"


def test_update_missing_row_raises(store: SqlRemoteStore) -> None:
    with pytest.raises(RemoteError):
        store.update("tasks", "missing", {"status": "done"})


def test_update_rejects_unknown_or_id_columns(store: SqlRemoteStore) -> None:
    task = _new_task(store, "Buy milk")

    with pytest.raises(RemoteError):
        store.update("tasks", task["id"], {"title": "x"})
    with pytest.raises(RemoteError):
        store.update("tasks", task["id"], {"id": "other"})


def test_unknown_table_raises(store: SqlRemoteStore) -> None:
    with pytest.raises(RemoteError):
        store.select("subtasks")


def test_comment_requires_existing_task(store: SqlRemoteStore) -> None:
    with pytest.raises(RemoteError):
        store.insert(
            "comments",
            {"content": "orphan", "task_id": "missing", "timestamp": datetime.now(timezone.utc)},
        )


def test_delete_task_cascades_to_comments(store: SqlRemoteStore) -> None:
    task = _new_task(store, "Buy milk")
    store.insert(
        "comments",
        {"content": "Looks good", "task_id": task["id"], "timestamp": datetime.now(timezone.utc)},
    )

    store.delete("tasks", task["id"])

    assert store.select("tasks") == []
    assert store.select("comments") == []
    with pytest.raises(RemoteError):
        store.delete("tasks", task["id"])


def test_board_round_trip_through_database(database_url: str) -> None:
    service = build_service(Settings(database_url=database_url))
    assert service.load()

    assert service.create_task("Write report")
    (task_id,) = service.store.task_ids()
    assert service.move_task(task_id, Status.START, 0, Status.DONE, 0)
    assert service.change_priority(task_id, Priority.IMMEDIATE)
    assert service.add_comment("Looks good", task_id=task_id)

    reloaded = build_service(Settings(database_url=database_url))
    assert reloaded.load()
    assert reloaded.snapshot() == service.snapshot()

    task = reloaded.store.find_task(task_id)
    assert task.status == Status.DONE
    assert task.priority == Priority.IMMEDIATE
    assert [comment.content for comment in task.comments] == ["Looks good"]

    assert reloaded.delete_task(task_id)
    assert build_service(Settings(database_url=database_url)).load()


def test_failed_write_leaves_board_unchanged(database_url: str) -> None:
    service = build_service(Settings(database_url=database_url))
    service.load()

    assert not service.change_priority("missing", Priority.URGENT)
    assert not service.add_comment("orphan", task_id="missing")
    assert service.store.task_ids() == []
