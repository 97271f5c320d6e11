"""Session coordination.

A file-based registry where sessions announce the files they are working on.
Advisory only: overlapping claims are reported, never blocked.
"""

from sharedtree.coordination.conflicts import conflicts_involving, detect_conflicts
from sharedtree.coordination.distribution import Suggestion, suggest_distribution
from sharedtree.coordination.naming import normalize_path, sanitize_name
from sharedtree.coordination.registry import SessionRegistry
from sharedtree.coordination.schema import (
    Conflict,
    Locked,
    LockConflict,
    LockResult,
    Session,
    SessionOptions,
    SessionPatch,
    SessionStatus,
)

__all__ = [
    "Conflict",
    "LockConflict",
    "LockResult",
    "Locked",
    "Session",
    "SessionOptions",
    "SessionPatch",
    "SessionRegistry",
    "SessionStatus",
    "Suggestion",
    "conflicts_involving",
    "detect_conflicts",
    "normalize_path",
    "sanitize_name",
    "suggest_distribution",
]
