"""Pending/completed work items shared by every session."""

from sharedtree.tasks.ledger import TaskLedger
from sharedtree.tasks.schema import (
    CompletionInfo,
    Priority,
    Task,
    TaskInput,
    TaskList,
    TaskStatus,
    validate_task_id,
)

__all__ = [
    "CompletionInfo",
    "Priority",
    "Task",
    "TaskInput",
    "TaskLedger",
    "TaskList",
    "TaskStatus",
    "validate_task_id",
]
