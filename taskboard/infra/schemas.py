"""Row shapes exchanged with the remote store, validated on the way in."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from taskboard.domain.entities import Comment, Task
from taskboard.domain.enums import Priority, Status

from .models import utcnow
from .remote import RemoteError

RowModel = TypeVar("RowModel", bound=BaseModel)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("content must not be blank")
    return value


def _coerce_id(value: Any) -> str:
    if value is None or value == "":
        raise ValueError("id is required")
    return str(value)


class TaskRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    content: str
    status: Status
    priority: Priority

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _require_text(value)

    def to_entity(self, comments: Iterable[Comment] = ()) -> Task:
        return Task(
            id=self.id,
            content=self.content,
            status=self.status,
            priority=self.priority,
            comments=tuple(comments),
        )


class CommentRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    content: str
    task_id: str
    timestamp: datetime

    @field_validator("id", "task_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_epoch_millis(cls, value: Any) -> Any:
        # browser clients write Date.now() style integers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        return value

    @field_validator("timestamp")
    @classmethod
    def attach_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_entity(self) -> Comment:
        return Comment(
            id=self.id,
            content=self.content,
            timestamp=self.timestamp,
            task_id=self.task_id,
        )


class NewTaskRow(BaseModel):
    content: str = Field(min_length=1)
    status: Status = Status.START
    priority: Priority = Priority.NORMAL


class NewCommentRow(BaseModel):
    content: str = Field(min_length=1)
    task_id: str
    timestamp: datetime = Field(default_factory=utcnow)


def parse_row(model: type[RowModel], row: Any) -> RowModel:
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        raise RemoteError(f"Malformed {model.__name__} row: {exc}") from exc
