"""Stable on-disk layout of a project's coordination state.

    <root>/.sharedtree/
        sessions/<name>.json   one record per live session
        tasks.json             pending/completed task ledger
        goal.json              current goal
        goal-history.json      goal change history, newest first

Other tooling reads these names by convention; do not rename them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SESSIONS_DIRNAME = "sessions"
TASKS_FILENAME = "tasks.json"
GOAL_FILENAME = "goal.json"
GOAL_HISTORY_FILENAME = "goal-history.json"


@dataclass(frozen=True)
class ProjectLayout:
    """Resolved paths for one project root."""

    root: Path
    state_dir: Path

    @classmethod
    def for_root(cls, root: str | Path, state_dirname: str = ".sharedtree") -> ProjectLayout:
        root_path = Path(root).expanduser().resolve()
        return cls(root=root_path, state_dir=root_path / state_dirname)

    @property
    def sessions_dir(self) -> Path:
        return self.state_dir / SESSIONS_DIRNAME

    @property
    def tasks_file(self) -> Path:
        return self.state_dir / TASKS_FILENAME

    @property
    def goal_file(self) -> Path:
        return self.state_dir / GOAL_FILENAME

    @property
    def goal_history_file(self) -> Path:
        return self.state_dir / GOAL_HISTORY_FILENAME

    def session_file(self, name: str) -> Path:
        """Record path for an already-sanitized session name."""
        return self.sessions_dir / f"{name}.json"

    def is_initialized(self) -> bool:
        return self.state_dir.is_dir()
