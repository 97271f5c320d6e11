"""End-to-end coordination flows across independent Project instances."""

from __future__ import annotations

import pytest

from sharedtree.config import Config
from sharedtree.coordination import LockConflict, detect_conflicts
from sharedtree.errors import DuplicateSession, InvalidTask, NotFound
from sharedtree.project import Project
from sharedtree.tasks import CompletionInfo, Priority, TaskInput
from tests.utils import FakeClock


@pytest.fixture
def second_process(project: Project, clock: FakeClock) -> Project:
    """Another handle on the same root, standing in for a second process."""
    return Project(project.root, Config(), clock=clock)


def test_two_sessions_collide_on_one_file(project: Project, second_process: Project) -> None:
    project.sessions.create("frontend")
    second_process.sessions.create("backend")

    project.sessions.lock_file("frontend", "src/App.tsx")
    second_process.sessions.lock_file("backend", "src/api/auth.js")
    assert detect_conflicts(project.sessions.list()) == []

    result = second_process.sessions.lock_file("backend", "src/App.tsx")

    assert isinstance(result, LockConflict)
    conflicts = detect_conflicts(project.sessions.list())
    assert [c.to_dict() for c in conflicts] == [
        {"file": "src/App.tsx", "sessions": ["frontend", "backend"], "kind": "file"}
    ]


def test_release_clears_conflict(project: Project, second_process: Project) -> None:
    project.sessions.create("A")
    project.sessions.create("B")
    project.sessions.lock_file("A", "x.js")

    result = second_process.sessions.lock_file("B", "x.js")
    assert set(result.sessions) == {"A", "B"}

    project.sessions.release_file("A", "x.js")
    assert second_process.sessions.conflicts() == []


def test_duplicate_leaves_exactly_one(project: Project, second_process: Project) -> None:
    project.sessions.create("frontend")
    with pytest.raises(DuplicateSession):
        second_process.sessions.create("frontend")

    assert [s.name for s in project.sessions.list()] == ["frontend"]


def test_task_lifecycle(project: Project, second_process: Project) -> None:
    with pytest.raises(InvalidTask):
        project.tasks.add({"title": "", "priority": "low"})

    task = project.tasks.add({"title": "T"})
    assert task.priority is Priority.MEDIUM

    second_process.tasks.complete(task.id, CompletionInfo(session="backend"))
    assert project.tasks.list().pending == []
    assert [t.id for t in project.tasks.list().completed] == [task.id]

    with pytest.raises(NotFound):
        project.tasks.complete(task.id)


def test_goal_shared_between_handles(project: Project, second_process: Project) -> None:
    project.goals.update("Ship the beta by Friday.", source="cli")

    current = second_process.goals.get_current()
    assert current.goal == "Ship the beta by Friday."
    assert current.source == "cli"

    second_process.goals.update("Ship the beta by Monday.", source="dashboard")
    history = project.goals.history()
    assert [e.source for e in history] == ["dashboard", "cli"]
    assert history[0].old_goal == "Ship the beta by Friday."


def test_project_initialized_on_first_write(project: Project) -> None:
    assert not project.is_initialized()
    project.sessions.create("frontend")
    assert project.is_initialized()
    assert project.layout.sessions_dir.is_dir()
