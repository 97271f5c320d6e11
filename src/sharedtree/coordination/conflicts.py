"""File-level conflict detection over a snapshot of live sessions."""

from __future__ import annotations

from collections.abc import Iterable

from sharedtree.coordination.naming import normalize_path
from sharedtree.coordination.schema import Conflict, Session, SessionStatus
from sharedtree.errors import InvalidPath
from sharedtree.logging import get_logger

log = get_logger("conflicts")


def detect_conflicts(sessions: Iterable[Session]) -> list[Conflict]:
    """Report every file held by two or more sessions.

    Pure and deterministic: conflicts come out in the order their file was
    first seen, holders in session order. Idle sessions still count; only
    closed sessions are ignored.
    """
    holders: dict[str, list[str]] = {}

    for session in sessions:
        if session.status is SessionStatus.CLOSED:
            continue
        for raw_path in session.active_files:
            try:
                path = normalize_path(raw_path)
            except InvalidPath:
                log.warning("Session '%s' holds an unusable path %r", session.name, raw_path)
                continue
            names = holders.setdefault(path, [])
            if session.name not in names:
                names.append(session.name)

    return [
        Conflict(file=path, sessions=names)
        for path, names in holders.items()
        if len(names) > 1
    ]


def conflicts_involving(conflicts: Iterable[Conflict], name: str) -> list[Conflict]:
    """Filter conflicts down to those that name one session."""
    return [conflict for conflict in conflicts if name in conflict.sessions]
