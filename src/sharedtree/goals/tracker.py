"""Current-goal tracking with an append-only change history.

The goal is a single string stored in `goal.json`; every accepted change is
also recorded, newest first, in `goal-history.json` with metrics describing
how it differs from the previous version. History is capped at
`GoalConfig.history_limit` entries. Reverting appends a new entry rather than
rewriting the log.
"""

from __future__ import annotations

import re
import uuid
from collections import Counter
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sharedtree.config.schema import GoalConfig
from sharedtree.coordination.schema import utcnow
from sharedtree.errors import CorruptRecord
from sharedtree.goals.compare import analyze_changes, tokenize
from sharedtree.goals.schema import (
    CurrentGoal,
    GoalHistoryEntry,
    GoalStatistics,
    GoalUpdateResult,
    GoalValidation,
    ValidationIssue,
)
from sharedtree.logging import get_logger
from sharedtree.store.layout import ProjectLayout
from sharedtree.store.records import RecordStore

log = get_logger("goals")

_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")

GoalListener = Callable[[GoalUpdateResult], None]


class GoalTracker:
    """Reads and updates the project goal for one project root."""

    def __init__(
        self,
        store: RecordStore,
        layout: ProjectLayout,
        config: GoalConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._layout = layout
        self._config = config or GoalConfig()
        self._clock = clock or utcnow
        self._listeners: list[GoalListener] = []

    # =========================================================================
    # Records
    # =========================================================================

    def _load_history(self) -> list[GoalHistoryEntry]:
        path = self._layout.goal_history_file
        data = self._store.read(path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise CorruptRecord(path=str(path), reason="goal history must be a JSON array")
        try:
            return [GoalHistoryEntry.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise CorruptRecord(path=str(path), reason=f"malformed entry: {exc!r}") from exc

    def _save_history(self, entries: list[GoalHistoryEntry]) -> None:
        self._store.write(
            self._layout.goal_history_file, [entry.to_dict() for entry in entries]
        )

    def get_current(self) -> CurrentGoal:
        """Return the current goal, or an unset CurrentGoal if none was ever set.

        Raises:
            CorruptRecord: If the goal file is damaged.
        """
        path = self._layout.goal_file
        data = self._store.read(path)
        if data is None:
            return CurrentGoal()
        if not isinstance(data, dict):
            raise CorruptRecord(path=str(path), reason="goal record must be a JSON object")
        try:
            return CurrentGoal.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CorruptRecord(path=str(path), reason=f"malformed goal: {exc!r}") from exc

    # =========================================================================
    # Validation and update
    # =========================================================================

    def validate(self, goal: Any) -> GoalValidation:
        """Check a candidate goal; problems come back as issues, not exceptions."""
        validation = GoalValidation()
        if not isinstance(goal, str) or not goal.strip():
            validation.issues.append(
                ValidationIssue("empty", "Goal must be a non-empty string")
            )
            return validation

        text = goal.strip()
        cfg = self._config
        if len(text) < cfg.min_length:
            validation.issues.append(
                ValidationIssue(
                    "too_short", f"Goal should be at least {cfg.min_length} characters long"
                )
            )
        if len(text) > cfg.max_length:
            validation.issues.append(
                ValidationIssue(
                    "too_long", f"Goal should be at most {cfg.max_length} characters long"
                )
            )
        if not _TERMINAL_PUNCTUATION.search(text):
            validation.issues.append(
                ValidationIssue("punctuation", "Goal should end with proper punctuation")
            )
        return validation

    def update(
        self,
        new_goal: str,
        source: str = "api",
        metadata: dict[str, Any] | None = None,
    ) -> GoalUpdateResult:
        """Replace the current goal and record the change.

        Invalid goals are not written; the result carries the issues instead.

        Raises:
            CorruptRecord: If the existing goal or history file is damaged.
        """
        validation = self.validate(new_goal)
        if not validation.valid:
            log.info("Goal update from %s rejected: %d issue(s)", source, len(validation.issues))
            return GoalUpdateResult(
                success=False, source=source, reason="invalid_goal", issues=validation.issues
            )

        goal = new_goal.strip()
        previous = self.get_current()
        history = self._load_history()
        timestamp = self._clock()
        meta = dict(metadata or {})

        entry = GoalHistoryEntry(
            id=f"goal_{uuid.uuid4().hex[:12]}",
            timestamp=timestamp,
            source=source,
            old_goal=previous.goal,
            new_goal=goal,
            changes=analyze_changes(previous.goal, goal, self._config.word_sample),
            metadata=meta,
        )

        current = CurrentGoal(goal=goal, last_updated=timestamp, source=source, metadata=meta)
        self._store.write(self._layout.goal_file, current.to_dict())

        history.insert(0, entry)
        del history[self._config.history_limit :]
        self._save_history(history)

        log.info("Goal updated from %s (similarity %.2f)", source, entry.changes.similarity)

        result = GoalUpdateResult(
            success=True,
            goal=goal,
            previous_goal=previous.goal,
            timestamp=timestamp,
            source=source,
            entry_id=entry.id,
            changes=entry.changes,
        )
        self._notify(result)
        return result

    def history(self, limit: int = 10) -> list[GoalHistoryEntry]:
        """Return the most recent `limit` entries, newest first."""
        if limit <= 0:
            return []
        return self._load_history()[:limit]

    def revert(self, entry_id: str) -> GoalUpdateResult:
        """Restore the goal as it was before a history entry.

        Implemented as a forward update with source "revert".
        """
        target = next((e for e in self._load_history() if e.id == entry_id), None)
        if target is None:
            log.info("Goal revert target %s not found", entry_id)
            return GoalUpdateResult(success=False, source="revert", reason="entry_not_found")

        return self.update(
            target.old_goal,
            "revert",
            {
                "reverted_from": entry_id,
                "reverted_to": target.timestamp.isoformat(),
                "reason": "Reverted to previous goal version",
            },
        )

    # =========================================================================
    # Maintenance and reporting
    # =========================================================================

    def cleanup_history(self, keep: int | None = None) -> int:
        """Trim history to the newest `keep` entries. Returns how many were dropped."""
        keep = self._config.history_limit if keep is None else keep
        if keep < 0:
            raise ValueError("keep must be >= 0")
        history = self._load_history()
        dropped = len(history) - keep
        if dropped <= 0:
            return 0
        self._save_history(history[:keep])
        log.info("Cleaned up goal history, kept %d entries", keep)
        return dropped

    def statistics(self) -> GoalStatistics:
        current = self.get_current()
        history = self._load_history()

        updates_per_day = 0.0
        if len(history) >= 2:
            span = history[0].timestamp - history[-1].timestamp
            days = span.total_seconds() / 86400
            if days > 0:
                updates_per_day = len(history) / days

        average = (
            round(sum(len(e.new_goal) for e in history) / len(history)) if history else 0
        )
        sources = Counter(e.source for e in history)

        return GoalStatistics(
            current_goal=current.goal,
            last_updated=current.last_updated,
            goal_length=len(current.goal),
            word_count=len(tokenize(current.goal)),
            total_updates=len(history),
            updates_per_day=updates_per_day,
            average_goal_length=average,
            most_active_source=sources.most_common(1)[0][0] if sources else "none",
        )

    # =========================================================================
    # Listeners
    # =========================================================================

    def on_goal_updated(self, callback: GoalListener) -> Callable[[], None]:
        """Register a callback run after each successful update in this process.

        Returns:
            A function to unregister the callback.
        """
        self._listeners.append(callback)

        def unregister() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unregister

    def _notify(self, result: GoalUpdateResult) -> None:
        for callback in list(self._listeners):
            try:
                callback(result)
            except Exception as e:
                log.warning("Goal listener error: %s", e)
