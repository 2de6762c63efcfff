from __future__ import annotations

from typing import Iterable

from taskboard.domain.columns import STATUS_ORDER, initial_columns
from taskboard.domain.entities import Column, Task
from taskboard.domain.enums import Status


def _validate(columns: tuple[Column, ...]) -> None:
    statuses = tuple(column.id for column in columns)
    if statuses != STATUS_ORDER:
        raise ValueError(f"Expected columns {[s.value for s in STATUS_ORDER]}, got {[str(s) for s in statuses]}")

    seen: set[str] = set()
    for column in columns:
        for task in column.tasks:
            if task.status != column.id:
                raise ValueError(f"Task {task.id} has status {task.status} but sits in column {column.id}")
            if task.id in seen:
                raise ValueError(f"Task {task.id} appears more than once")
            seen.add(task.id)


class BoardStore:
    """In-memory board state shared with the presentation layer.

    The column tuple is only ever swapped whole through ``replace``; the
    drafts and active task reference mirror the text inputs and the open
    comment dialog.
    """

    def __init__(self, columns: Iterable[Column] | None = None) -> None:
        self._columns: tuple[Column, ...] = initial_columns()
        if columns is not None:
            self.replace(columns)
        self.loading = True
        self.task_draft = ""
        self.comment_draft = ""
        self.active_task_id: str | None = None

    def snapshot(self) -> tuple[Column, ...]:
        return self._columns

    def replace(self, columns: Iterable[Column]) -> None:
        new_columns = tuple(columns)
        _validate(new_columns)
        self._columns = new_columns

    def column(self, status: Status) -> Column | None:
        return next((column for column in self._columns if column.id == status), None)

    def find_task(self, task_id: str) -> Task | None:
        for column in self._columns:
            for task in column.tasks:
                if task.id == task_id:
                    return task
        return None

    def task_ids(self) -> list[str]:
        return [task.id for column in self._columns for task in column.tasks]
