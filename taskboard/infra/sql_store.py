from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .models import CommentModel, TaskModel
from .remote import COMMENTS_TABLE, TASKS_TABLE, RemoteError, Row

logger = logging.getLogger(__name__)

_TABLES = {
    TASKS_TABLE: (TaskModel, ("id", "content", "status", "priority")),
    COMMENTS_TABLE: (CommentModel, ("id", "content", "task_id", "timestamp")),
}

_ORDERING = {
    TASKS_TABLE: (TaskModel.created_at.asc(), TaskModel.id.asc()),
    COMMENTS_TABLE: (CommentModel.timestamp.asc(), CommentModel.id.asc()),
}


def _resolve(table: str):
    try:
        return _TABLES[table]
    except KeyError:
        raise RemoteError(f"Unknown table: {table}") from None


def _to_row(model, fields: tuple[str, ...]) -> Row:
    return {field: getattr(model, field) for field in fields}


class SqlRemoteStore:
    """Remote store client backed by the hosted Postgres database."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def select(self, table: str) -> list[Row]:
        model_cls, fields = _resolve(table)
        try:
            with self._session_factory() as session:
                stmt = select(model_cls).order_by(*_ORDERING[table])
                return [_to_row(item, fields) for item in session.scalars(stmt)]
        except SQLAlchemyError as exc:
            raise RemoteError(f"select from {table} failed: {exc}") from exc

    def insert(self, table: str, row: Row) -> Row:
        model_cls, fields = _resolve(table)
        unknown = set(row) - set(fields)
        if unknown:
            raise RemoteError(f"Unknown columns for {table}: {', '.join(sorted(unknown))}")
        try:
            with self._session_factory() as session:
                item = model_cls(**row)
                session.add(item)
                session.commit()
                session.refresh(item)
                inserted = _to_row(item, fields)
        except SQLAlchemyError as exc:
            raise RemoteError(f"insert into {table} failed: {exc}") from exc
        logger.debug("Inserted %s row %s", table, inserted["id"])
        return inserted

    def update(self, table: str, row_id: str, values: Row) -> None:
        model_cls, fields = _resolve(table)
        unknown = set(values) - (set(fields) - {"id"})
        if unknown:
            raise RemoteError(f"Cannot update columns of {table}: {', '.join(sorted(unknown))}")
        try:
            with self._session_factory() as session:
                item = session.get(model_cls, row_id)
                if item is None:
                    raise RemoteError(f"No {table} row with id {row_id}")
                for key, value in values.items():
                    setattr(item, key, value)
                session.commit()
        except SQLAlchemyError as exc:
            raise RemoteError(f"update of {table} row {row_id} failed: {exc}") from exc

    def delete(self, table: str, row_id: str) -> None:
        model_cls, _ = _resolve(table)
        try:
            with self._session_factory() as session:
                item = session.get(model_cls, row_id)
                if item is None:
                    raise RemoteError(f"No {table} row with id {row_id}")
                session.delete(item)
                session.commit()
        except SQLAlchemyError as exc:
            raise RemoteError(f"delete of {table} row {row_id} failed: {exc}") from exc
