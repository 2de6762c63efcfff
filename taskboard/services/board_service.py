from __future__ import annotations

import logging
from collections import defaultdict

from taskboard.domain.columns import initial_columns, parse_status
from taskboard.domain.entities import Column, Comment, Task
from taskboard.domain.enums import Priority, Status
from taskboard.infra.remote import COMMENTS_TABLE, TASKS_TABLE, RemoteError, RemoteStoreClient
from taskboard.infra.schemas import (
    CommentRow,
    NewCommentRow,
    NewTaskRow,
    RowModel,
    TaskRow,
    parse_row,
)

from .board_store import BoardStore

logger = logging.getLogger(__name__)


def _valid_rows(model: type[RowModel], rows: list) -> list[RowModel]:
    valid = []
    for row in rows:
        try:
            valid.append(parse_row(model, row))
        except RemoteError as exc:
            logger.warning("Skipping invalid row: %s", exc)
    return valid


class BoardService:
    """Board operations: each one writes to the remote store first and
    patches the local snapshot only once the write has succeeded.

    Remote failures are logged and leave the snapshot untouched. Every
    operation returns True when the snapshot changed.
    """

    def __init__(self, remote: RemoteStoreClient, store: BoardStore | None = None) -> None:
        self._remote = remote
        self.store = store if store is not None else BoardStore()

    def snapshot(self) -> tuple[Column, ...]:
        return self.store.snapshot()

    def load(self) -> bool:
        try:
            raw_tasks = self._remote.select(TASKS_TABLE)
            raw_comments = self._remote.select(COMMENTS_TABLE)
        except RemoteError as exc:
            logger.error("Error fetching board data: %s", exc)
            return False
        finally:
            self.store.loading = False

        task_rows = _valid_rows(TaskRow, raw_tasks)
        comment_rows = _valid_rows(CommentRow, raw_comments)

        comments_by_task: dict[str, list[Comment]] = defaultdict(list)
        for row in comment_rows:
            comments_by_task[row.task_id].append(row.to_entity())

        tasks: list[Task] = []
        seen: set[str] = set()
        for row in task_rows:
            if row.id in seen:
                logger.warning("Skipping duplicate task row %s", row.id)
                continue
            seen.add(row.id)
            comments = sorted(comments_by_task.get(row.id, ()), key=lambda comment: comment.timestamp)
            tasks.append(row.to_entity(comments))

        self.store.replace(
            column.with_tasks(task for task in tasks if task.status == column.id)
            for column in initial_columns()
        )
        logger.info("Loaded %d tasks and %d comments", len(tasks), len(comment_rows))
        return True

    def move_task(
        self,
        task_id: str,
        source: Status | str,
        source_index: int,
        destination: Status | str,
        destination_index: int,
    ) -> bool:
        source_status = parse_status(source)
        destination_status = parse_status(destination)
        if source_status is None or destination_status is None:
            logger.debug("Ignoring move between unknown columns %r -> %r", source, destination)
            return False

        source_column = self.store.column(source_status)
        if not 0 <= source_index < len(source_column.tasks):
            logger.debug("Ignoring move from out-of-range index %d in %s", source_index, source_status)
            return False
        task = source_column.tasks[source_index]
        if task.id != task_id:
            logger.warning("Task at %s[%d] is %s, not %s", source_status, source_index, task.id, task_id)
            return False

        try:
            self._remote.update(TASKS_TABLE, task.id, {"status": destination_status.value})
        except RemoteError as exc:
            logger.error("Error updating task status: %s", exc)
            return False

        moved = task.with_status(destination_status)
        columns = []
        for column in self.store.snapshot():
            tasks = list(column.tasks)
            if column.id == source_status:
                del tasks[source_index]
            if column.id == destination_status:
                tasks.insert(destination_index, moved)
            columns.append(column.with_tasks(tasks))
        self.store.replace(columns)
        logger.debug("Moved task %s to %s[%d]", task.id, destination_status, destination_index)
        return True

    def create_task(self, content: str | None = None) -> bool:
        text = (self.store.task_draft if content is None else content).strip()
        if not text:
            return False

        payload = NewTaskRow(content=text).model_dump(mode="json")
        try:
            row = parse_row(TaskRow, self._remote.insert(TASKS_TABLE, payload))
        except RemoteError as exc:
            logger.error("Error adding task: %s", exc)
            return False

        task = row.to_entity()
        self.store.replace(
            column.with_tasks((*column.tasks, task)) if column.id == task.status else column
            for column in self.store.snapshot()
        )
        self.store.task_draft = ""
        logger.info("Created task %s", task.id)
        return True

    def change_priority(self, task_id: str, priority: Priority | str) -> bool:
        try:
            new_priority = Priority(priority)
        except ValueError:
            logger.warning("Unknown priority %r for task %s", priority, task_id)
            return False

        try:
            self._remote.update(TASKS_TABLE, task_id, {"priority": new_priority.value})
        except RemoteError as exc:
            logger.error("Error updating task priority: %s", exc)
            return False

        current = self.store.find_task(task_id)
        if current is None or current.priority == new_priority:
            return False
        self.store.replace(
            column.with_tasks(
                task.with_priority(new_priority) if task.id == task_id else task
                for task in column.tasks
            )
            for column in self.store.snapshot()
        )
        return True

    def delete_task(self, task_id: str) -> bool:
        try:
            self._remote.delete(TASKS_TABLE, task_id)
        except RemoteError as exc:
            logger.error("Error deleting task: %s", exc)
            return False

        self.store.replace(
            column.with_tasks(task for task in column.tasks if task.id != task_id)
            for column in self.store.snapshot()
        )
        if self.store.active_task_id == task_id:
            self.store.active_task_id = None
        logger.info("Deleted task %s", task_id)
        return True

    def select_task(self, task_id: str) -> bool:
        if self.store.find_task(task_id) is None:
            return False
        self.store.active_task_id = task_id
        return True

    def close_task(self) -> None:
        self.store.active_task_id = None

    def add_comment(self, content: str | None = None, task_id: str | None = None) -> bool:
        target_id = task_id if task_id is not None else self.store.active_task_id
        text = (self.store.comment_draft if content is None else content).strip()
        if target_id is None or not text:
            return False
        if self.store.find_task(target_id) is None:
            logger.warning("Cannot comment on unknown task %s", target_id)
            return False

        payload = NewCommentRow(content=text, task_id=target_id).model_dump()
        try:
            row = parse_row(CommentRow, self._remote.insert(COMMENTS_TABLE, payload))
        except RemoteError as exc:
            logger.error("Error adding comment: %s", exc)
            return False

        comment = row.to_entity()
        self.store.replace(
            column.with_tasks(
                task.with_comment(comment) if task.id == target_id else task
                for task in column.tasks
            )
            for column in self.store.snapshot()
        )
        self.store.comment_draft = ""
        self.store.active_task_id = None
        return True
