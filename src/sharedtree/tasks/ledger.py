"""Task ledger persisted as a single JSON record.

    {
      "meta": {"created": ..., "last_updated": ..., "pending_count": 1, "completed_count": 0},
      "pending": [...],
      "completed": [...]
    }
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sharedtree.config.schema import TaskDefaults
from sharedtree.coordination.schema import utcnow
from sharedtree.errors import CorruptRecord, InvalidTask, TaskNotFound
from sharedtree.logging import get_logger
from sharedtree.store.layout import ProjectLayout
from sharedtree.store.records import RecordStore
from sharedtree.tasks.schema import (
    CompletionInfo,
    Priority,
    Task,
    TaskInput,
    TaskList,
    TaskStatus,
    validate_task_id,
)

log = get_logger("tasks")


class TaskLedger:
    """Pending and completed tasks for one project."""

    def __init__(
        self,
        store: RecordStore,
        layout: ProjectLayout,
        defaults: TaskDefaults | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._layout = layout
        self._clock = clock or utcnow
        defaults = defaults or TaskDefaults()
        try:
            self._default_priority = Priority(defaults.default_priority)
        except ValueError:
            raise ValueError(
                f"tasks.default_priority {defaults.default_priority!r} is not a valid priority"
            ) from None

    def _load(self) -> tuple[dict[str, Any], TaskList]:
        path = self._layout.tasks_file
        data = self._store.read(path)
        if data is None:
            return {}, TaskList()
        if not isinstance(data, dict):
            raise CorruptRecord(path=str(path), reason="task ledger must be a JSON object")
        try:
            tasks = TaskList(
                pending=[Task.from_dict(t) for t in data.get("pending", [])],
                completed=[Task.from_dict(t) for t in data.get("completed", [])],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise CorruptRecord(path=str(path), reason=f"malformed task: {exc!r}") from exc
        meta = data.get("meta")
        return (meta if isinstance(meta, dict) else {}), tasks

    def _save(self, meta: dict[str, Any], tasks: TaskList) -> None:
        now = self._clock().isoformat()
        record = tasks.to_dict()
        record["meta"] = {
            "created": meta.get("created", now),
            "last_updated": now,
            "pending_count": len(tasks.pending),
            "completed_count": len(tasks.completed),
        }
        self._store.write(self._layout.tasks_file, record)

    def add(self, task: TaskInput | dict[str, Any]) -> Task:
        """Append a pending task and persist the ledger.

        Raises:
            InvalidTask: If the input is invalid or the id is already used.
        """
        request = task if isinstance(task, TaskInput) else TaskInput.from_mapping(task)
        meta, tasks = self._load()

        task_id = request.id or str(uuid.uuid4())
        validate_task_id(task_id)
        if any(t.id == task_id for t in (*tasks.pending, *tasks.completed)):
            raise InvalidTask(f"task with id '{task_id}' already exists")

        created = Task(
            id=task_id,
            title=request.title,
            description=request.description,
            priority=request.priority or self._default_priority,
            estimated_time=request.estimated_time,
            tags=list(request.tags),
            assigned_session=request.assigned_session,
            dependencies=list(request.dependencies),
            generated_by=request.generated_by,
            status=TaskStatus.PENDING,
            created=self._clock(),
        )
        tasks.pending.append(created)
        self._save(meta, tasks)

        log.info("Task added: %s (%s)", created.title, created.id)
        return created

    def complete(self, task_id: str, info: CompletionInfo | None = None) -> Task:
        """Move a pending task to the completed list. Completion is final.

        Raises:
            TaskNotFound: If no pending task has this id.
        """
        info = info or CompletionInfo()
        meta, tasks = self._load()

        for index, task in enumerate(tasks.pending):
            if task.id == task_id:
                break
        else:
            raise TaskNotFound(task_id)

        task = tasks.pending.pop(index)
        task.status = TaskStatus.COMPLETED
        task.completed_at = self._clock()
        task.completing_session = info.session
        task.notes = info.notes or ""
        tasks.completed.append(task)
        self._save(meta, tasks)

        log.info("Task completed: %s by %s", task.title, task.completing_session or "unknown")
        return task

    def list(self) -> TaskList:
        return self._load()[1]

    def get(self, task_id: str) -> Task | None:
        tasks = self.list()
        for task in (*tasks.pending, *tasks.completed):
            if task.id == task_id:
                return task
        return None

    def summary(self) -> dict[str, Any]:
        tasks = self.list()
        pending, completed = len(tasks.pending), len(tasks.completed)
        total = pending + completed
        return {
            "pending": pending,
            "completed": completed,
            "total": total,
            "completion_rate": round(completed * 100 / total) if total else 0,
        }
