"""Wires the store and the three coordination components for one project root."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from sharedtree.config import Config, load_config
from sharedtree.coordination.registry import SessionRegistry
from sharedtree.goals.tracker import GoalTracker
from sharedtree.logging import get_logger
from sharedtree.store.layout import ProjectLayout
from sharedtree.store.records import RecordStore
from sharedtree.tasks.ledger import TaskLedger

log = get_logger("project")


class Project:
    """Coordination state of one project directory.

    Components share a RecordStore but no in-memory state; every call re-reads
    the files, so several Project instances (in one or many processes) can
    point at the same root.
    """

    def __init__(
        self,
        root: str | Path,
        config: Config | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or load_config(root)
        self.layout = ProjectLayout.for_root(root, self.config.storage.dir)
        self.store = RecordStore(self.layout.state_dir)
        self.sessions = SessionRegistry(
            self.store, self.layout, self.config.sessions, clock=clock
        )
        self.tasks = TaskLedger(self.store, self.layout, self.config.tasks, clock=clock)
        self.goals = GoalTracker(self.store, self.layout, self.config.goals, clock=clock)
        log.debug("Opened project at %s", self.layout.root)

    @classmethod
    def open(cls, root: str | Path = ".", config: Config | None = None) -> Project:
        return cls(root, config)

    @property
    def root(self) -> Path:
        return self.layout.root

    def is_initialized(self) -> bool:
        """True once any coordination state has been written under the root."""
        return self.layout.is_initialized()
