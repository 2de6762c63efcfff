"""The three fixed board columns, one per task status."""
from __future__ import annotations

from .entities import Column
from .enums import Status

COLUMN_LAYOUT: tuple[tuple[Status, str, str], ...] = (
    (Status.START, "Start", "#DBEAFE"),
    (Status.IN_PROGRESS, "In Progress", "#FEF9C3"),
    (Status.DONE, "Done", "#FEE2E2"),
)

STATUS_ORDER: tuple[Status, ...] = tuple(status for status, _, _ in COLUMN_LAYOUT)


def initial_columns() -> tuple[Column, ...]:
    return tuple(
        Column(id=status, title=title, tasks=(), color=color)
        for status, title, color in COLUMN_LAYOUT
    )


def parse_status(value: Status | str) -> Status | None:
    """Map a column id coming from the presentation layer to a Status."""
    try:
        return Status(value)
    except ValueError:
        return None
