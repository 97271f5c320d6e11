"""Suggest which session should pick up each task.

Scores every live session for a task description: a focus tag appearing in the
text is worth 10, and each file the session already holds costs 1. Ties go to
the earlier session.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sharedtree.coordination.schema import Session

FOCUS_MATCH_SCORE = 10


@dataclass(frozen=True)
class Suggestion:
    task: str
    recommended: str | None  # None when no session is live
    reason: str  # "focus_match", "lowest_workload", or "no_sessions"
    score: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task,
            "recommended_session": self.recommended,
            "reason": self.reason,
            "score": self.score,
        }


def score_session(task: str, session: Session) -> int:
    text = task.lower()
    focus_match = any(tag.lower() in text for tag in session.focus_tags if tag)
    return (FOCUS_MATCH_SCORE if focus_match else 0) - len(session.active_files)


def suggest_distribution(tasks: Sequence[str], sessions: Sequence[Session]) -> list[Suggestion]:
    """Recommend a session for each task description."""
    suggestions: list[Suggestion] = []

    for task in tasks:
        best: Session | None = None
        best_score = 0
        for session in sessions:
            score = score_session(task, session)
            if best is None or score > best_score:
                best, best_score = session, score

        if best is None:
            suggestions.append(Suggestion(task=task, recommended=None, reason="no_sessions"))
            continue

        reason = "focus_match" if best_score > 0 else "lowest_workload"
        suggestions.append(
            Suggestion(task=task, recommended=best.name, reason=reason, score=best_score)
        )

    return suggestions
