"""Exception types raised by the coordination core.

Programmer errors (bad input, missing records) derive from CoordinationError and
abort the call. Damaged on-disk state raises CorruptRecord, which is kept apart
so callers can choose between failing hard and treating the project as
uninitialized. Lock conflicts and goal validation failures are not exceptions;
they come back as result values.
"""

from __future__ import annotations

from dataclasses import dataclass


class CoordinationError(Exception):
    """Base class for misuse of the registry, ledger, or tracker."""


@dataclass
class InvalidName(CoordinationError):
    """A session name is empty or too long after sanitization."""

    name: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid session name {self.name!r}: {self.reason}"


@dataclass
class DuplicateSession(CoordinationError):
    """A live session already uses this name."""

    name: str

    def __str__(self) -> str:
        return f"Session '{self.name}' already exists"


@dataclass
class NotFound(CoordinationError):
    """A named record does not exist."""

    kind: str
    key: str

    def __str__(self) -> str:
        return f"{self.kind.capitalize()} '{self.key}' not found"


class SessionNotFound(NotFound):
    def __init__(self, key: str) -> None:
        super().__init__(kind="session", key=key)


class TaskNotFound(NotFound):
    def __init__(self, key: str) -> None:
        super().__init__(kind="task", key=key)


@dataclass
class InvalidTask(CoordinationError):
    """Task input failed validation."""

    reason: str

    def __str__(self) -> str:
        return f"Invalid task: {self.reason}"


@dataclass
class InvalidPath(CoordinationError):
    """A file path is empty or cannot be normalized."""

    path: str

    def __str__(self) -> str:
        return f"Invalid file path: {self.path!r}"


@dataclass
class CorruptRecord(Exception):
    """A record file exists but cannot be parsed."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"Corrupt record {self.path}: {self.reason}"
