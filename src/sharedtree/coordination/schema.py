"""Data schemas for session coordination."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Field readers for stored records. A wrong type raises TypeError, which the
# loaders report as CorruptRecord.


def record_str(data: dict[str, Any], key: str, default: str | None = None) -> str:
    """Read a string field. Without a default the field is required."""
    value = data[key] if default is None else data.get(key, default)
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, not {type(value).__name__}")
    return value


def record_optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string or null, not {type(value).__name__}")
    return value


def record_str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{key} must be a list of strings")
    return list(value)


def record_dict(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise TypeError(f"{key} must be an object")
    return dict(value)


class SessionStatus(str, Enum):
    """Lifecycle state of a session.

    ACTIVE sessions may or may not hold files; IDLE sessions hold none.
    CLOSED is terminal and never persisted: closing deletes the record.
    """

    ACTIVE = "active"
    IDLE = "idle"
    CLOSED = "closed"


@dataclass
class Session:
    """One actor's claimed working context."""

    id: str
    name: str  # Sanitized, unique among live sessions
    focus_tags: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    file_patterns: list[str] = field(default_factory=list)
    active_files: list[str] = field(default_factory=list)  # Normalized, no duplicates
    current_task: str | None = None
    status: SessionStatus = SessionStatus.ACTIVE
    created: datetime = field(default_factory=utcnow)
    last_active: datetime = field(default_factory=utcnow)

    def holds(self, path: str) -> bool:
        return path in self.active_files

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "focus_tags": list(self.focus_tags),
            "directories": list(self.directories),
            "file_patterns": list(self.file_patterns),
            "active_files": list(self.active_files),
            "current_task": self.current_task,
            "status": self.status.value,
            "created": self.created.isoformat(),
            "last_active": self.last_active.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        return cls(
            id=record_str(data, "id"),
            name=record_str(data, "name"),
            focus_tags=record_str_list(data, "focus_tags"),
            directories=record_str_list(data, "directories"),
            file_patterns=record_str_list(data, "file_patterns"),
            active_files=record_str_list(data, "active_files"),
            current_task=record_optional_str(data, "current_task"),
            status=SessionStatus(data.get("status", "active")),
            created=datetime.fromisoformat(data["created"]),
            last_active=datetime.fromisoformat(data["last_active"]),
        )


def _check_str_list(label: str, value: list[str] | None) -> None:
    if value is None:
        return
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{label} must be a list of strings")


@dataclass
class SessionOptions:
    """Options for creating a session.

    Fields left as None take the configured defaults (see SessionDefaults):
    focus ["general"], directories ["."], file patterns ["*"].
    """

    focus_tags: list[str] | None = None
    directories: list[str] | None = None
    file_patterns: list[str] | None = None
    current_task: str | None = None

    def __post_init__(self) -> None:
        _check_str_list("focus_tags", self.focus_tags)
        _check_str_list("directories", self.directories)
        _check_str_list("file_patterns", self.file_patterns)


@dataclass
class SessionPatch:
    """Fields to merge into an existing session; None leaves a field unchanged.

    An empty `current_task` clears the task. Setting `status` to IDLE releases
    every held file. `add_files` and `remove_files` edit the held set without a
    conflict check; use SessionRegistry.lock_file to claim contested files.
    """

    current_task: str | None = None
    status: SessionStatus | None = None
    focus_tags: list[str] | None = None
    directories: list[str] | None = None
    file_patterns: list[str] | None = None
    add_files: list[str] = field(default_factory=list)
    remove_files: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.status is not None:
            self.status = SessionStatus(self.status)
            if self.status is SessionStatus.CLOSED:
                raise ValueError("Use SessionRegistry.close() to close a session")
        _check_str_list("focus_tags", self.focus_tags)
        _check_str_list("directories", self.directories)
        _check_str_list("file_patterns", self.file_patterns)
        _check_str_list("add_files", self.add_files)
        _check_str_list("remove_files", self.remove_files)


@dataclass
class Conflict:
    """Two or more live sessions holding the same file."""

    file: str
    sessions: list[str]
    kind: str = "file"

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "sessions": list(self.sessions), "kind": self.kind}


@dataclass(frozen=True)
class Locked:
    """The file is now (or was already) held by the session."""

    session: str
    file: str
    already_held: bool = False

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "session": self.session,
            "file": self.file,
            "already_held": self.already_held,
        }


@dataclass(frozen=True)
class LockConflict:
    """Other live sessions already hold the file.

    `sessions` names every holder. When `recorded` is True the requester's claim
    was stored anyway (advisory mode) and is listed last.
    """

    session: str
    file: str
    sessions: tuple[str, ...]
    recorded: bool
    reason: str = "file_in_use"

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "session": self.session,
            "file": self.file,
            "reason": self.reason,
            "conflicting_sessions": list(self.sessions),
            "recorded": self.recorded,
        }


LockResult = Locked | LockConflict
