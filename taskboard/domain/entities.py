from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from .enums import Priority, Status


@dataclass(frozen=True)
class Comment:
    id: str
    content: str
    timestamp: datetime
    task_id: str


@dataclass(frozen=True)
class Task:
    id: str
    content: str
    status: Status = Status.START
    priority: Priority = Priority.NORMAL
    comments: tuple[Comment, ...] = ()

    def with_status(self, status: Status) -> Task:
        return replace(self, status=status)

    def with_priority(self, priority: Priority) -> Task:
        return replace(self, priority=priority)

    def with_comment(self, comment: Comment) -> Task:
        return replace(self, comments=(*self.comments, comment))


@dataclass(frozen=True)
class Column:
    id: Status
    title: str
    tasks: tuple[Task, ...]
    color: str

    def with_tasks(self, tasks) -> Column:
        return replace(self, tasks=tuple(tasks))
