"""Session registry: CRUD over session records plus advisory file locks.

Each session is one JSON file under `<state>/sessions/`. Every operation reads
the current record from disk, changes it in memory and writes it back, so
several processes can share the directory. There is no cross-record
transaction: two processes locking the same file at the same moment can both
succeed. Lock results are advice, not a guarantee.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sharedtree.config.schema import SessionDefaults
from sharedtree.coordination.conflicts import conflicts_involving, detect_conflicts
from sharedtree.coordination.naming import normalize_path, sanitize_name
from sharedtree.coordination.schema import (
    Conflict,
    Locked,
    LockConflict,
    LockResult,
    Session,
    SessionOptions,
    SessionPatch,
    SessionStatus,
    utcnow,
)
from sharedtree.errors import CorruptRecord, DuplicateSession, SessionNotFound
from sharedtree.logging import get_logger
from sharedtree.store.layout import ProjectLayout
from sharedtree.store.records import RecordStore

log = get_logger("registry")


class SessionRegistry:
    """Manages the live sessions of one project."""

    def __init__(
        self,
        store: RecordStore,
        layout: ProjectLayout,
        defaults: SessionDefaults | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            store: Record store used for every read and write.
            layout: Project layout naming the sessions directory.
            defaults: Defaults for options omitted at creation.
            clock: Timestamp source (UTC), injectable for tests.
        """
        self._store = store
        self._layout = layout
        self._defaults = defaults or SessionDefaults()
        self._clock = clock or utcnow

    def sanitize(self, name: str) -> str:
        return sanitize_name(name, self._defaults.max_name_length)

    # =========================================================================
    # Record access
    # =========================================================================

    def _parse(self, path: Any, data: Any) -> Session:
        if not isinstance(data, dict):
            raise CorruptRecord(path=str(path), reason="session record must be a JSON object")
        try:
            return Session.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CorruptRecord(path=str(path), reason=f"malformed session: {exc!r}") from exc

    def _load(self, name: str) -> Session | None:
        path = self._layout.session_file(name)
        data = self._store.read(path)
        if data is None:
            return None
        return self._parse(path, data)

    def _require(self, name: str) -> Session:
        session = self._load(name)
        if session is None:
            raise SessionNotFound(name)
        return session

    def _save(self, session: Session) -> None:
        session.last_active = self._clock()
        self._store.write(self._layout.session_file(session.name), session.to_dict())

    # =========================================================================
    # Public API
    # =========================================================================

    def create(self, name: str, options: SessionOptions | None = None) -> Session:
        """Create a session and persist it.

        Raises:
            InvalidName: If the name is empty or too long after sanitization.
            DuplicateSession: If a live session already has this name.
        """
        clean = self.sanitize(name)
        opts = options or SessionOptions()
        defaults = self._defaults
        now = self._clock()

        session = Session(
            id=str(uuid.uuid4()),
            name=clean,
            focus_tags=list(opts.focus_tags if opts.focus_tags is not None else defaults.focus_tags),
            directories=list(
                opts.directories if opts.directories is not None else defaults.directories
            ),
            file_patterns=list(
                opts.file_patterns if opts.file_patterns is not None else defaults.file_patterns
            ),
            current_task=opts.current_task or None,
            status=SessionStatus.ACTIVE,
            created=now,
            last_active=now,
        )

        try:
            self._store.write(
                self._layout.session_file(clean), session.to_dict(), exclusive=True
            )
        except FileExistsError:
            raise DuplicateSession(clean) from None

        log.info("Session '%s' created with ID %s", clean, session.id)
        return session

    def get(self, name: str) -> Session | None:
        """Return the live session with this name, or None."""
        return self._load(self.sanitize(name))

    def list(self, *, skip_corrupt: bool = False) -> list[Session]:
        """Return all live sessions, oldest first.

        Args:
            skip_corrupt: Log and skip damaged records instead of raising.

        Raises:
            CorruptRecord: If a record is damaged and `skip_corrupt` is False.
        """
        sessions: list[Session] = []
        for path in self._store.list(self._layout.sessions_dir):
            try:
                data = self._store.read(path)
                if data is None:
                    # Closed between listing and reading
                    continue
                sessions.append(self._parse(path, data))
            except CorruptRecord as exc:
                if not skip_corrupt:
                    raise
                log.warning("Skipping session record: %s", exc)
        sessions.sort(key=lambda s: (s.created, s.name))
        return sessions

    def update(self, name: str, patch: SessionPatch) -> Session:
        """Merge `patch` into the session and persist it.

        Raises:
            SessionNotFound: If no live session has this name.
        """
        session = self._require(self.sanitize(name))

        if patch.current_task is not None:
            session.current_task = patch.current_task or None
        if patch.focus_tags is not None:
            session.focus_tags = list(patch.focus_tags)
        if patch.directories is not None:
            session.directories = list(patch.directories)
        if patch.file_patterns is not None:
            session.file_patterns = list(patch.file_patterns)

        for raw in patch.remove_files:
            path = normalize_path(raw)
            if path in session.active_files:
                session.active_files.remove(path)
        for raw in patch.add_files:
            path = normalize_path(raw)
            if path not in session.active_files:
                session.active_files.append(path)

        if patch.status is SessionStatus.IDLE:
            if session.active_files:
                log.info(
                    "Session '%s' going idle, releasing %d file(s)",
                    session.name,
                    len(session.active_files),
                )
            session.active_files = []
            session.status = SessionStatus.IDLE
        elif patch.status is SessionStatus.ACTIVE or patch.add_files:
            session.status = SessionStatus.ACTIVE
        elif patch.remove_files and not session.active_files:
            session.status = SessionStatus.IDLE

        self._save(session)
        log.debug("Session '%s' updated", session.name)
        return session

    def lock_file(self, name: str, path: str, *, strict: bool = False) -> LockResult:
        """Claim a file for a session.

        Re-locking a file the session already holds succeeds and only refreshes
        `last_active`. If other live sessions hold the file the result is a
        LockConflict naming them; the claim is still recorded unless `strict`
        is set.

        Raises:
            SessionNotFound: If no live session has this name.
            InvalidPath: If the path is empty.
        """
        clean = self.sanitize(name)
        file = normalize_path(path)
        session = self._require(clean)

        if session.holds(file):
            self._save(session)
            return Locked(session=clean, file=file, already_held=True)

        holders = [
            other.name
            for other in self.list(skip_corrupt=True)
            if other.name != clean and other.holds(file)
        ]

        if holders and strict:
            log.warning(
                "Session '%s' refused %s, held by %s", clean, file, ", ".join(holders)
            )
            return LockConflict(
                session=clean, file=file, sessions=tuple(holders), recorded=False
            )

        session.active_files.append(file)
        session.status = SessionStatus.ACTIVE
        self._save(session)

        if holders:
            log.warning(
                "Session '%s' locked %s, also held by %s", clean, file, ", ".join(holders)
            )
            return LockConflict(
                session=clean, file=file, sessions=(*holders, clean), recorded=True
            )

        log.debug("Session '%s' locked %s", clean, file)
        return Locked(session=clean, file=file)

    def release_file(self, name: str, path: str) -> bool:
        """Release a file. Returns False if the session did not hold it.

        Either way `last_active` is refreshed.

        Raises:
            SessionNotFound: If no live session has this name.
        """
        session = self._require(self.sanitize(name))
        file = normalize_path(path)

        if not session.holds(file):
            self._save(session)
            return False

        session.active_files.remove(file)
        if not session.active_files:
            session.status = SessionStatus.IDLE
        self._save(session)
        log.debug("Session '%s' released %s", session.name, file)
        return True

    def close(self, name: str) -> Session:
        """Delete the session record; its files are released and its name freed.

        Returns:
            The final state of the session, marked CLOSED.

        Raises:
            SessionNotFound: If no live session has this name.
        """
        clean = self.sanitize(name)
        session = self._require(clean)
        if not self._store.delete(self._layout.session_file(clean)):
            # Another process closed it first
            raise SessionNotFound(clean)

        session.status = SessionStatus.CLOSED
        session.active_files = []
        log.info("Session '%s' closed", clean)
        return session

    # =========================================================================
    # Conflict views
    # =========================================================================

    def conflicts(self) -> list[Conflict]:
        """Run the conflict detector against the current snapshot."""
        return detect_conflicts(self.list(skip_corrupt=True))

    def conflicts_for(self, name: str) -> list[Conflict]:
        return conflicts_involving(self.conflicts(), self.sanitize(name))

    def overview(self) -> dict[str, Any]:
        """Summarize live sessions and current conflicts."""
        sessions = self.list(skip_corrupt=True)
        conflicts = detect_conflicts(sessions)
        return {
            "total_sessions": len(sessions),
            "active_sessions": sum(1 for s in sessions if s.status is SessionStatus.ACTIVE),
            "idle_sessions": sum(1 for s in sessions if s.status is SessionStatus.IDLE),
            "conflict_count": len(conflicts),
            "sessions": [
                {
                    "name": s.name,
                    "status": s.status.value,
                    "focus_tags": list(s.focus_tags),
                    "active_files": len(s.active_files),
                    "current_task": s.current_task,
                    "last_active": s.last_active.isoformat(),
                }
                for s in sessions
            ],
            "conflicts": [c.to_dict() for c in conflicts],
        }
