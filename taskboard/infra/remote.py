"""Contract of the hosted database client the board synchronizes with."""
from __future__ import annotations

from typing import Any, Protocol

TASKS_TABLE = "tasks"
COMMENTS_TABLE = "comments"

Row = dict[str, Any]


class RemoteError(Exception):
    """Transport, auth or constraint failure reported by the remote store."""


class RemoteStoreClient(Protocol):
    def select(self, table: str) -> list[Row]:
        ...

    def insert(self, table: str, row: Row) -> Row:
        ...

    def update(self, table: str, row_id: str, values: Row) -> None:
        ...

    def delete(self, table: str, row_id: str) -> None:
        ...
