"""Record persistence: atomic JSON files and the project's file layout."""

from sharedtree.store.layout import ProjectLayout
from sharedtree.store.records import RecordStore

__all__ = [
    "ProjectLayout",
    "RecordStore",
]
