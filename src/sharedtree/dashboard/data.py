"""Data collection functions for dashboard API responses.

A dashboard process polls these on an interval and pushes the dicts over its
own transport. Lock conflicts and validation issues are ordinary data here.
Damaged session records are skipped (and logged) so one bad file does not
blank the whole view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sharedtree.coordination.conflicts import detect_conflicts

if TYPE_CHECKING:
    from sharedtree.project import Project


def get_sessions_data(project: Project) -> list[dict[str, Any]]:
    """Get every live session as a JSON-ready dict."""
    return [session.to_dict() for session in project.sessions.list(skip_corrupt=True)]


def get_conflicts_data(project: Project) -> list[dict[str, Any]]:
    return [conflict.to_dict() for conflict in project.sessions.conflicts()]


def get_tasks_data(project: Project) -> dict[str, Any]:
    tasks = project.tasks.list()
    return {
        **tasks.to_dict(),
        "summary": project.tasks.summary(),
    }


def get_goal_data(project: Project, history_limit: int = 10) -> dict[str, Any]:
    """Get the current goal with its recent history and statistics."""
    tracker = project.goals
    return {
        "current": tracker.get_current().to_dict(),
        "history": [entry.to_dict() for entry in tracker.history(history_limit)],
        "statistics": tracker.statistics().to_dict(),
    }


def get_snapshot(project: Project, history_limit: int = 10) -> dict[str, Any]:
    """Get everything the dashboard shows in one poll.

    Sessions are read once so the session list and the conflicts agree.
    """
    sessions = project.sessions.list(skip_corrupt=True)
    return {
        "project_root": str(project.root),
        "sessions": [session.to_dict() for session in sessions],
        "conflicts": [conflict.to_dict() for conflict in detect_conflicts(sessions)],
        "tasks": get_tasks_data(project),
        "goal": get_goal_data(project, history_limit),
    }
