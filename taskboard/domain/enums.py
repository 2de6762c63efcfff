from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    START = "start"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Priority(StrEnum):
    NORMAL = "normal"
    URGENT = "urgent"
    IMMEDIATE = "immediate"


PRIORITY_COLORS: dict[Priority, str] = {
    Priority.NORMAL: "#DCFCE7",
    Priority.URGENT: "#FFEDD5",
    Priority.IMMEDIATE: "#FEE2E2",
}
