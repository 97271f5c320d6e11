"""Shared test utilities for sharedtree tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from sharedtree.coordination.schema import Session, SessionStatus


class FakeClock:
    """Deterministic UTC clock that advances by `step` on every call."""

    def __init__(
        self,
        start: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        return value


def make_session(
    name: str,
    files: list[str] | None = None,
    status: SessionStatus = SessionStatus.ACTIVE,
    focus: list[str] | None = None,
) -> Session:
    """Build an in-memory session for pure-function tests."""
    return Session(
        id=f"id-{name}",
        name=name,
        focus_tags=focus or [],
        active_files=list(files or []),
        status=status,
    )


def write_raw(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, value: Any) -> None:
    write_raw(path, json.dumps(value))
