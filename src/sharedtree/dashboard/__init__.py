"""Payload builders for a dashboard process."""

from sharedtree.dashboard.data import (
    get_conflicts_data,
    get_goal_data,
    get_sessions_data,
    get_snapshot,
    get_tasks_data,
)

__all__ = [
    "get_conflicts_data",
    "get_goal_data",
    "get_sessions_data",
    "get_snapshot",
    "get_tasks_data",
]
