"""Tests for the task ledger."""

from __future__ import annotations

from pathlib import Path

import pytest

from sharedtree.config import Config, TaskDefaults
from sharedtree.errors import CorruptRecord, InvalidTask, TaskNotFound
from sharedtree.project import Project
from sharedtree.tasks import CompletionInfo, Priority, TaskInput, TaskStatus
from tests.utils import FakeClock, read_json, write_json, write_raw


class TestAdd:
    def test_add_minimal(self, project: Project) -> None:
        task = project.tasks.add(TaskInput(title="  Write docs "))

        assert task.title == "Write docs"
        assert task.priority is Priority.MEDIUM
        assert task.status is TaskStatus.PENDING
        assert task.estimated_time == "unknown"
        assert task.generated_by == "manual"
        assert task.id
        assert task.created is not None

    def test_add_persists_with_meta(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="t1"))
        project.tasks.add(TaskInput(title="two", id="t2"))

        record = read_json(project.layout.tasks_file)
        assert [t["id"] for t in record["pending"]] == ["t1", "t2"]
        assert record["completed"] == []
        assert record["meta"]["pending_count"] == 2
        assert record["meta"]["completed_count"] == 0
        assert record["meta"]["created"] < record["meta"]["last_updated"]

    def test_add_from_mapping(self, project: Project) -> None:
        task = project.tasks.add(
            {
                "title": "Auth endpoints",
                "priority": "high",
                "tags": ["api"],
                "dependencies": ["schema"],
                "assigned_session": "backend",
            }
        )
        assert task.priority is Priority.HIGH
        assert task.tags == ["api"]
        assert task.dependencies == ["schema"]
        assert task.assigned_session == "backend"

    def test_generated_ids_unique(self, project: Project) -> None:
        ids = {project.tasks.add(TaskInput(title=f"t{i}")).id for i in range(5)}
        assert len(ids) == 5

    def test_duplicate_id_rejected(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="same"))
        with pytest.raises(InvalidTask, match="already exists"):
            project.tasks.add(TaskInput(title="two", id="same"))

    def test_duplicate_of_completed_id_rejected(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="same"))
        project.tasks.complete("same")
        with pytest.raises(InvalidTask):
            project.tasks.add(TaskInput(title="again", id="same"))

    @pytest.mark.parametrize(
        "data",
        [
            {"title": ""},
            {"title": "   "},
            {"description": "no title"},
            {"title": "x", "priority": "critical"},
            {"title": "x", "id": "has space"},
            {"title": "x", "id": "abc\n"},
            {"title": "x", "tags": "api"},
            {"title": "x", "colour": "blue"},
        ],
    )
    def test_invalid_input(self, project: Project, data: dict) -> None:
        with pytest.raises(InvalidTask):
            project.tasks.add(data)
        assert project.tasks.list().pending == []

    def test_configured_default_priority(self, tmp_path: Path, clock: FakeClock) -> None:
        project = Project(tmp_path, Config(tasks=TaskDefaults(default_priority="low")), clock=clock)
        assert project.tasks.add(TaskInput(title="x")).priority is Priority.LOW

    def test_bad_default_priority(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            Project(tmp_path, Config(tasks=TaskDefaults(default_priority="urgent")))


class TestComplete:
    def test_complete_moves_task(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="t1"))
        project.tasks.add(TaskInput(title="two", id="t2"))

        done = project.tasks.complete("t1", CompletionInfo(session="frontend", notes="shipped"))

        assert done.status is TaskStatus.COMPLETED
        assert done.completing_session == "frontend"
        assert done.notes == "shipped"
        assert done.completed_at is not None

        tasks = project.tasks.list()
        assert [t.id for t in tasks.pending] == ["t2"]
        assert [t.id for t in tasks.completed] == ["t1"]

    def test_complete_without_info(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="t1"))
        done = project.tasks.complete("t1")
        assert done.completing_session is None
        assert done.notes == ""

    def test_complete_unknown(self, project: Project) -> None:
        with pytest.raises(TaskNotFound):
            project.tasks.complete("nope")

    def test_complete_twice(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="t1"))
        project.tasks.complete("t1")
        with pytest.raises(TaskNotFound):
            project.tasks.complete("t1")


class TestQueries:
    def test_list_empty(self, project: Project) -> None:
        tasks = project.tasks.list()
        assert tasks.pending == []
        assert tasks.completed == []

    def test_get(self, project: Project) -> None:
        project.tasks.add(TaskInput(title="one", id="t1"))
        project.tasks.add(TaskInput(title="two", id="t2"))
        project.tasks.complete("t2")

        assert project.tasks.get("t1").title == "one"
        assert project.tasks.get("t2").status is TaskStatus.COMPLETED
        assert project.tasks.get("t3") is None

    def test_summary(self, project: Project) -> None:
        assert project.tasks.summary()["completion_rate"] == 0
        for i in range(3):
            project.tasks.add(TaskInput(title=f"t{i}", id=f"t{i}"))
        project.tasks.complete("t0")

        assert project.tasks.summary() == {
            "pending": 2,
            "completed": 1,
            "total": 3,
            "completion_rate": 33,
        }

    def test_round_trip_through_disk(self, project: Project, clock: FakeClock) -> None:
        added = project.tasks.add(
            TaskInput(title="one", id="t1", description="details", tags=["x"], generated_by="ai")
        )
        reopened = Project(project.root, Config(), clock=clock)
        assert reopened.tasks.get("t1") == added


class TestCorruption:
    def test_invalid_json(self, project: Project) -> None:
        write_raw(project.layout.tasks_file, "{oops")
        with pytest.raises(CorruptRecord):
            project.tasks.list()

    def test_wrong_shape(self, project: Project) -> None:
        write_raw(project.layout.tasks_file, '{"pending": [{"title": "no id"}]}')
        with pytest.raises(CorruptRecord):
            project.tasks.list()

    def test_not_an_object(self, project: Project) -> None:
        write_raw(project.layout.tasks_file, "[]")
        with pytest.raises(CorruptRecord):
            project.tasks.add(TaskInput(title="x"))

    @pytest.mark.parametrize(
        "task",
        [
            {"id": "t1", "title": 42},
            {"id": "t1", "title": "x", "tags": "api"},
            {"id": "t1", "title": "x", "dependencies": [1, 2]},
            {"id": "t1", "title": "x", "notes": None},
            "t1",
        ],
    )
    def test_wrong_field_types(self, project: Project, task: object) -> None:
        write_json(project.layout.tasks_file, {"pending": [task], "completed": []})
        with pytest.raises(CorruptRecord):
            project.tasks.list()
