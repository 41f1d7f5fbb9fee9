"""chronokv Snapshot module - Current-value store over the temporal index."""

from chronokv.snapshot.store import SnapshotStore

__all__ = [
    "SnapshotStore",
]
