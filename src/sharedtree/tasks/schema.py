"""Data schemas for the task ledger."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from sharedtree.coordination.schema import (
    record_optional_str,
    record_str,
    record_str_list,
)
from sharedtree.errors import InvalidTask

TASK_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """PENDING -> COMPLETED is the only transition."""

    PENDING = "pending"
    COMPLETED = "completed"


def validate_task_id(task_id: Any) -> str:
    """Return `task_id` if it is a non-empty token of letters, digits, '-' or '_'."""
    if not isinstance(task_id, str) or not TASK_ID_PATTERN.fullmatch(task_id):
        raise InvalidTask(
            f"task id {task_id!r} may only contain letters, numbers, hyphens, and underscores"
        )
    return task_id


def parse_priority(value: Any) -> Priority:
    try:
        return Priority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise InvalidTask(f"priority {value!r} must be one of: {allowed}") from None


@dataclass
class TaskInput:
    """Caller-supplied fields for a new task, validated on construction.

    `priority` None means the ledger's default (medium unless configured).
    `id` None means the ledger generates one.
    """

    title: str
    description: str = ""
    priority: Priority | str | None = None
    estimated_time: str = "unknown"
    tags: list[str] = field(default_factory=list)
    assigned_session: str | None = None
    dependencies: list[str] = field(default_factory=list)
    generated_by: str = "manual"
    id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise InvalidTask("title must be a non-empty string")
        self.title = self.title.strip()
        self.description = (self.description or "").strip()
        if self.priority is not None:
            self.priority = parse_priority(self.priority)
        if self.id is not None:
            validate_task_id(self.id)
        for label in ("tags", "dependencies"):
            value = getattr(self, label)
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                raise InvalidTask(f"{label} must be a list of strings")
            setattr(self, label, list(value))

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> TaskInput:
        """Build from loosely typed input such as a dashboard request body."""
        if not isinstance(data, dict):
            raise InvalidTask("task input must be a mapping")
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidTask(f"unknown field(s): {', '.join(unknown)}")
        if "title" not in data:
            raise InvalidTask("title must be a non-empty string")
        return cls(**data)


@dataclass
class CompletionInfo:
    session: str | None = None  # Session that finished the task
    notes: str = ""


@dataclass
class Task:
    """A unit of planned work."""

    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    estimated_time: str = "unknown"
    tags: list[str] = field(default_factory=list)
    assigned_session: str | None = None
    dependencies: list[str] = field(default_factory=list)
    generated_by: str = "manual"
    status: TaskStatus = TaskStatus.PENDING
    created: datetime | None = None
    completed_at: datetime | None = None
    completing_session: str | None = None
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "estimated_time": self.estimated_time,
            "tags": list(self.tags),
            "assigned_session": self.assigned_session,
            "dependencies": list(self.dependencies),
            "generated_by": self.generated_by,
            "status": self.status.value,
            "created": self.created.isoformat() if self.created else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "completing_session": self.completing_session,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        created = data.get("created")
        completed_at = data.get("completed_at")
        return cls(
            id=record_str(data, "id"),
            title=record_str(data, "title"),
            description=record_str(data, "description", ""),
            priority=Priority(data.get("priority", "medium")),
            estimated_time=record_str(data, "estimated_time", "unknown"),
            tags=record_str_list(data, "tags"),
            assigned_session=record_optional_str(data, "assigned_session"),
            dependencies=record_str_list(data, "dependencies"),
            generated_by=record_str(data, "generated_by", "manual"),
            status=TaskStatus(data.get("status", "pending")),
            created=datetime.fromisoformat(created) if created else None,
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            completing_session=record_optional_str(data, "completing_session"),
            notes=record_str(data, "notes", ""),
        )


@dataclass
class TaskList:
    pending: list[Task] = field(default_factory=list)
    completed: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pending": [t.to_dict() for t in self.pending],
            "completed": [t.to_dict() for t in self.completed],
        }
