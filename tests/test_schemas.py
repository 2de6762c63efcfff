from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskboard.domain.enums import Priority, Status
from taskboard.infra.remote import RemoteError
from taskboard.infra.schemas import CommentRow, NewTaskRow, TaskRow, parse_row


def test_task_row_coerces_numeric_id_and_ignores_extra_columns() -> None:
    row = parse_row(
        TaskRow,
        {"id": 42, "content": "Buy milk", "status": "in-progress", "priority": "urgent", "created_at": "x"},
    )

    task = row.to_entity()
    assert task.id == "42"
    assert task.status == Status.IN_PROGRESS
    assert task.priority == Priority.URGENT
    assert task.comments == ()


@pytest.mark.parametrize(
    "row",
    [
        {"id": "t1", "content": "   ", "status": "start", "priority": "normal"},
        {"id": "t1", "content": "x", "status": "inicio", "priority": "normal"},
        {"id": "t1", "content": "x", "status": "start", "priority": "urgente"},
        {"id": None, "content": "x", "status": "start", "priority": "normal"},
        {"content": "x", "status": "start", "priority": "normal"},
    ],
)
def test_task_row_rejects_invalid_rows(row: dict) -> None:
    with pytest.raises(RemoteError):
        parse_row(TaskRow, row)


def test_comment_row_accepts_epoch_millis() -> None:
    row = parse_row(
        CommentRow,
        {"id": 7, "content": "Looks good", "task_id": 3, "timestamp": 1_700_000_000_000},
    )

    comment = row.to_entity()
    assert comment.id == "7"
    assert comment.task_id == "3"
    assert comment.timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_comment_row_assumes_utc_for_naive_timestamps() -> None:
    row = parse_row(
        CommentRow,
        {"id": "c1", "content": "hi", "task_id": "t1", "timestamp": datetime(2026, 1, 1, 12, 0)},
    )

    assert row.timestamp.tzinfo == timezone.utc


def test_new_task_row_defaults() -> None:
    assert NewTaskRow(content="Write report").model_dump(mode="json") == {
        "content": "Write report",
        "status": "start",
        "priority": "normal",
    }
