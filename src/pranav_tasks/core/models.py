# src/pranav_tasks/core/models.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_record(cls, raw: Any) -> Priority:
        if not raw:
            return cls.LOW
        try:
            return cls(str(raw))
        except ValueError:
            return cls.LOW


class FilterTab(StrEnum):
    """Task list tabs shown above the list."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def _new_task_id() -> str:
    return str(uuid.uuid4())


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class Task:
    """
    One actionable item.

    id and created_at never change after creation; priority is only ever
    set at creation time.
    """

    text: str
    priority: Priority = Priority.LOW
    completed: bool = False
    id: str = field(default_factory=_new_task_id)
    created_at: int = field(default_factory=_now_ms)  # epoch milliseconds

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Raises ValueError for records without a usable id/text.
        """
        task_id = rec.get("id")
        text = rec.get("text")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"task record without id: {rec!r}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task record without text: {rec!r}")

        created_raw = rec.get("createdAt", 0)
        try:
            created_at = int(created_raw)
        except (TypeError, ValueError):
            created_at = 0

        return cls(
            id=task_id,
            text=text,
            completed=rec.get("completed") is True,
            priority=Priority.from_record(rec.get("priority")),
            created_at=created_at,
        )


@dataclass(slots=True, frozen=True)
class StatsData:
    name: str
    value: int


@dataclass(slots=True, frozen=True)
class SmartAddPlan:
    """What the assistant decided for a smart-add: one priority, maybe subtasks."""

    priority: Priority
    subtasks: tuple[str, ...] = ()
