# -*- encoding: utf-8 -*-
"""
chronokv Snapshot Store - Current-value view over a TemporalIndex.

Callers that do not care about time use set/get/delete/scan. Each write is
stamped with the next tick of a logical clock that never falls behind the
index's latest timestamp, and each read queries the index at "now" (its
latest timestamp). As a result:

    store.get(key, field) == index.get_at(key, field, index.latest_timestamp)

A key whose last live field is deleted no longer exists() and drops out of
keys(). Its timelines keep their tombstones, so the index can still answer
reads at earlier timestamps.
"""

import threading
from typing import Optional

from chronokv.temporal.index import TemporalIndex
from chronokv.temporal.view import RecordView


class SnapshotStore:
    """
    Non-temporal key/field/value store layered on a TemporalIndex.

    Usage:
        store = SnapshotStore()
        store.set("user:1", "name", "Alice")
        store.get("user:1", "name")       # "Alice"
        store.delete("user:1", "name")    # True
        store.exists("user:1")            # False
    """

    def __init__(self, index: Optional[TemporalIndex] = None):
        """
        Initialize the store.

        Args:
            index: Index to write through. A fresh one is created if omitted.
        """
        self._index = index if index is not None else TemporalIndex()
        self._clock = 0
        self._clock_lock = threading.Lock()

    @property
    def index(self) -> TemporalIndex:
        """Underlying temporal index."""
        return self._index

    @property
    def now(self) -> Optional[int]:
        """Timestamp current reads are answered at, None if nothing was written."""
        return self._index.latest_timestamp

    def tick(self) -> int:
        """Advance the logical clock past every recorded timestamp."""
        with self._clock_lock:
            latest = self._index.latest_timestamp
            base = self._clock if latest is None else max(self._clock, latest)
            self._clock = base + 1
            return self._clock

    def set(self, key: str, field: str, value: str) -> None:
        self._index.set_at(key, field, value, self.tick())

    def set_with_ttl(self, key: str, field: str, value: str, ttl: int) -> None:
        """Write a value that expires ttl ticks from now."""
        self._index.set_at_with_ttl(key, field, value, self.tick(), ttl)

    def get(self, key: str, field: str) -> Optional[str]:
        return self._index.get_current(key, field)

    def delete(self, key: str, field: str) -> bool:
        """
        Delete a field as of now.

        Returns:
            False if the field has no current value, True otherwise
        """
        return self._index.delete_at(key, field, self.tick())

    def view(self, key: str, prefix: Optional[str] = None) -> RecordView:
        now = self.now
        if now is None:
            return RecordView(key=key, timestamp=0, prefix=prefix)
        return self._index.view_at(key, now, prefix=prefix)

    def scan(self, key: str) -> list[str]:
        """Current fields of a key as "field(value)", sorted by field name."""
        return self.view(key).entries()

    def scan_by_prefix(self, key: str, prefix: str) -> list[str]:
        """Current fields whose name starts with prefix, sorted by field name."""
        if not isinstance(prefix, str):
            return []
        return self.view(key, prefix=prefix).entries()

    def exists(self, key: str) -> bool:
        """Whether the key has at least one current field."""
        return bool(self.view(key))

    def keys(self) -> list[str]:
        """Sorted keys with at least one current field."""
        now = self.now
        if now is None:
            return []
        return self._index.keys_at(now)
