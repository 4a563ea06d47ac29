"""Shared star annotations kept in sync with the remote tree document."""

from scitree.sync.engine import AnnotationSyncEngine, SyncState

__all__ = ["AnnotationSyncEngine", "SyncState"]
