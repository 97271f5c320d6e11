"""Data schemas for the goal tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sharedtree.coordination.schema import record_dict, record_str, record_str_list


@dataclass
class ChangeMetrics:
    """How one goal version differs from the previous one."""

    length_change: int = 0
    word_change: int = 0
    added_words: list[str] = field(default_factory=list)
    removed_words: list[str] = field(default_factory=list)
    similarity: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "length_change": self.length_change,
            "word_change": self.word_change,
            "added_words": list(self.added_words),
            "removed_words": list(self.removed_words),
            "similarity": self.similarity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChangeMetrics:
        return cls(
            length_change=int(data.get("length_change", 0)),
            word_change=int(data.get("word_change", 0)),
            added_words=record_str_list(data, "added_words"),
            removed_words=record_str_list(data, "removed_words"),
            similarity=float(data.get("similarity", 1.0)),
        )


@dataclass
class GoalHistoryEntry:
    """One change to the current goal. Never edited after it is written."""

    id: str
    timestamp: datetime
    source: str
    old_goal: str
    new_goal: str
    changes: ChangeMetrics = field(default_factory=ChangeMetrics)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "old_goal": self.old_goal,
            "new_goal": self.new_goal,
            "changes": self.changes.to_dict(),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GoalHistoryEntry:
        return cls(
            id=record_str(data, "id"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            source=record_str(data, "source", "unknown"),
            old_goal=record_str(data, "old_goal", ""),
            new_goal=record_str(data, "new_goal"),
            changes=ChangeMetrics.from_dict(record_dict(data, "changes")),
            metadata=record_dict(data, "metadata"),
        )


@dataclass
class CurrentGoal:
    """The current goal, or the unset sentinel (empty goal, source "none")."""

    goal: str = ""
    last_updated: datetime | None = None
    source: str = "none"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_set(self) -> bool:
        return bool(self.goal)

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal": self.goal,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "source": self.source,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CurrentGoal:
        updated = data.get("last_updated")
        return cls(
            goal=record_str(data, "goal"),
            last_updated=datetime.fromisoformat(updated) if updated else None,
            source=record_str(data, "source", "unknown"),
            metadata=record_dict(data, "metadata"),
        )


@dataclass(frozen=True)
class ValidationIssue:
    code: str  # empty, too_short, too_long, punctuation
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass
class GoalValidation:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


@dataclass
class GoalUpdateResult:
    """Outcome of update() or revert().

    On failure `reason` is "invalid_goal" (see `issues`) or "entry_not_found".
    """

    success: bool
    goal: str | None = None
    previous_goal: str | None = None
    timestamp: datetime | None = None
    source: str | None = None
    entry_id: str | None = None
    changes: ChangeMetrics | None = None
    reason: str | None = None
    issues: list[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "goal": self.goal,
            "previous_goal": self.previous_goal,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "source": self.source,
            "entry_id": self.entry_id,
            "changes": self.changes.to_dict() if self.changes else None,
            "reason": self.reason,
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass
class GoalStatistics:
    current_goal: str
    last_updated: datetime | None
    goal_length: int
    word_count: int
    total_updates: int
    updates_per_day: float
    average_goal_length: int
    most_active_source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_goal": self.current_goal,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "goal_length": self.goal_length,
            "word_count": self.word_count,
            "total_updates": self.total_updates,
            "updates_per_day": self.updates_per_day,
            "average_goal_length": self.average_goal_length,
            "most_active_source": self.most_active_source,
        }
