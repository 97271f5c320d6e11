"""Configuration schema dataclasses for sharedtree.

Defines the structure of configuration at all levels (system, user, project).
Every field has a default so partial configs merge cleanly; values are checked
when the dataclass is built, not where they are used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StorageConfig:
    """Where coordination state lives, relative to the project root."""

    dir: str = ".sharedtree"

    def __post_init__(self) -> None:
        if not self.dir or not self.dir.strip():
            raise ValueError("storage.dir must be a non-empty path")


@dataclass
class SessionDefaults:
    """Defaults applied to sessions created without explicit options.

    Example config.yaml:
        sessions:
          max_name_length: 50
          focus_tags: [general]
          file_patterns: ["*"]
    """

    max_name_length: int = 50
    focus_tags: list[str] = field(default_factory=lambda: ["general"])
    directories: list[str] = field(default_factory=lambda: ["."])
    file_patterns: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        if self.max_name_length < 1:
            raise ValueError("sessions.max_name_length must be >= 1")


@dataclass
class TaskDefaults:
    """Task ledger defaults."""

    default_priority: str = "medium"


@dataclass
class GoalConfig:
    """Goal validation bounds and history retention."""

    min_length: int = 10
    max_length: int = 2000
    history_limit: int = 50  # Entries retained, oldest pruned first
    word_sample: int = 10  # Added/removed words stored per entry

    def __post_init__(self) -> None:
        if self.min_length < 1:
            raise ValueError("goals.min_length must be >= 1")
        if self.max_length < self.min_length:
            raise ValueError("goals.max_length must be >= goals.min_length")
        if self.history_limit < 1:
            raise ValueError("goals.history_limit must be >= 1")
        if self.word_sample < 0:
            raise ValueError("goals.word_sample must be >= 0")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, takes precedence over level
    file: str | None = None  # Log file path (SHAREDTREE_LOG env var)


@dataclass
class Config:
    """Root configuration object."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    sessions: SessionDefaults = field(default_factory=SessionDefaults)
    tasks: TaskDefaults = field(default_factory=TaskDefaults)
    goals: GoalConfig = field(default_factory=GoalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)  # Unknown top-level keys
