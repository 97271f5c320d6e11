"""The project's current goal and its change history."""

from sharedtree.goals.compare import analyze_changes, levenshtein, similarity
from sharedtree.goals.schema import (
    ChangeMetrics,
    CurrentGoal,
    GoalHistoryEntry,
    GoalStatistics,
    GoalUpdateResult,
    GoalValidation,
    ValidationIssue,
)
from sharedtree.goals.tracker import GoalTracker

__all__ = [
    "ChangeMetrics",
    "CurrentGoal",
    "GoalHistoryEntry",
    "GoalStatistics",
    "GoalTracker",
    "GoalUpdateResult",
    "GoalValidation",
    "ValidationIssue",
    "analyze_changes",
    "levenshtein",
    "similarity",
]
