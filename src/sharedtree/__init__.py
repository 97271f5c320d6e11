"""sharedtree: advisory coordination for sessions editing one file tree."""

__version__ = "0.1.0"

from sharedtree.config import Config, get_config, load_config
from sharedtree.coordination import (
    Conflict,
    Locked,
    LockConflict,
    LockResult,
    Session,
    SessionOptions,
    SessionPatch,
    SessionRegistry,
    SessionStatus,
    detect_conflicts,
    sanitize_name,
    suggest_distribution,
)
from sharedtree.errors import (
    CoordinationError,
    CorruptRecord,
    DuplicateSession,
    InvalidName,
    InvalidPath,
    InvalidTask,
    NotFound,
    SessionNotFound,
    TaskNotFound,
)
from sharedtree.goals import GoalTracker, GoalUpdateResult, similarity
from sharedtree.logging import get_logger, setup_logging
from sharedtree.project import Project
from sharedtree.store import ProjectLayout, RecordStore
from sharedtree.tasks import CompletionInfo, Priority, Task, TaskInput, TaskLedger

__all__ = [
    # Main entry point
    "Project",
    # Config and logging
    "Config",
    "get_config",
    "load_config",
    "get_logger",
    "setup_logging",
    # Store
    "ProjectLayout",
    "RecordStore",
    # Sessions
    "Conflict",
    "LockConflict",
    "LockResult",
    "Locked",
    "Session",
    "SessionOptions",
    "SessionPatch",
    "SessionRegistry",
    "SessionStatus",
    "detect_conflicts",
    "sanitize_name",
    "suggest_distribution",
    # Tasks
    "CompletionInfo",
    "Priority",
    "Task",
    "TaskInput",
    "TaskLedger",
    # Goals
    "GoalTracker",
    "GoalUpdateResult",
    "similarity",
    # Errors
    "CoordinationError",
    "CorruptRecord",
    "DuplicateSession",
    "InvalidName",
    "InvalidPath",
    "InvalidTask",
    "NotFound",
    "SessionNotFound",
    "TaskNotFound",
]
