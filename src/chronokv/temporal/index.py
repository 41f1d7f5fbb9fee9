# -*- encoding: utf-8 -*-
"""
chronokv Temporal Index - Point-in-time key/field/value queries.

The index owns one Timeline per (key, field). Every operation resolves a
field the same way ("floor resolution"):

1. No timeline for (key, field) -> absent
2. No event at or before the query timestamp -> absent
3. Floor event is a tombstone -> absent
4. Floor event has an expiry and the query timestamp is past it -> absent
5. Otherwise the floor event's value

Writes with invalid arguments are dropped without error unless the index is
built with strict=True, in which case InvalidArgumentError is raised.
"""

import logging
import threading
from bisect import bisect_left, insort
from contextlib import nullcontext
from typing import Any, Optional

from chronokv.exceptions import InvalidArgumentError
from chronokv.temporal.timeline import FieldEvent, Timeline
from chronokv.temporal.view import RecordView

logger = logging.getLogger(__name__)


def _is_identifier(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class TemporalIndex:
    """
    Mapping of key -> field -> Timeline with timestamp-aware reads.

    Timestamps are caller supplied integers and need not increase from one
    call to the next.

    Usage:
        index = TemporalIndex()
        index.set_at("user1", "name", "Alice", 10)
        index.get_at("user1", "name", 10)   # "Alice"
        index.get_at("user1", "name", 5)    # None
        index.scan_at("user1", 25)          # ["name(Alice)"]
    """

    def __init__(self, strict: bool = False, thread_safe: bool = True):
        """
        Initialize an empty index.

        Args:
            strict: Raise InvalidArgumentError on rejected writes
            thread_safe: Guard all access with a re-entrant lock
        """
        self._strict = strict
        self._lock = threading.RLock() if thread_safe else nullcontext()
        self._records: dict[str, dict[str, Timeline]] = {}
        self._field_names: dict[str, list[str]] = {}  # sorted, per key
        self._latest: Optional[int] = None

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def latest_timestamp(self) -> Optional[int]:
        """Largest timestamp ever recorded, or None for an empty index."""
        with self._lock:
            return self._latest

    # --- Write path ---

    def set_at(self, key: str, field: str, value: str, timestamp: int) -> None:
        """
        Record a value for (key, field) at a timestamp, with no expiry.

        Args:
            key: Record identifier
            field: Field name within the record
            value: Value to store
            timestamp: Slot to write (any order)
        """
        if not self._validate_write("set_at", key, field, value, timestamp):
            return
        self._record(key, field, timestamp, FieldEvent(value=value))

    def set_at_with_ttl(
        self, key: str, field: str, value: str, timestamp: int, ttl: int
    ) -> None:
        """
        Record a value that is live for [timestamp, timestamp + ttl].

        A negative or non-integer ttl drops the write.
        """
        if not self._validate_write("set_at_with_ttl", key, field, value, timestamp):
            return
        if not _is_timestamp(ttl) or ttl < 0:
            self._reject("set_at_with_ttl", "ttl", f"ttl must be a non-negative int, got {ttl!r}")
            return
        self._record(
            key, field, timestamp, FieldEvent(value=value, expiry=timestamp + ttl)
        )

    def delete_at(self, key: str, field: str, timestamp: int) -> bool:
        """
        Tombstone (key, field) at a timestamp.

        The field must resolve to a value at that timestamp; deleting a field
        that was never written, is already deleted, or has expired is a no-op.

        Args:
            key: Record identifier
            field: Field name within the record
            timestamp: Slot to write the tombstone to

        Returns:
            True if a tombstone was recorded, False otherwise
        """
        if not _is_identifier(key):
            self._reject("delete_at", "key", f"invalid key {key!r}")
            return False
        if not _is_identifier(field):
            self._reject("delete_at", "field", f"invalid field {field!r}")
            return False
        if not _is_timestamp(timestamp):
            self._reject("delete_at", "timestamp", f"invalid timestamp {timestamp!r}")
            return False

        with self._lock:
            timeline = self._timeline(key, field)
            if timeline is None or timeline.resolve(timestamp) is None:
                return False
            self._record(key, field, timestamp, FieldEvent.tombstone())
            return True

    # --- Read path ---

    def get_at(self, key: str, field: str, timestamp: int) -> Optional[str]:
        """
        Resolve (key, field) as of a timestamp.

        Returns:
            The live value, or None if never written, deleted or expired
        """
        if not _is_timestamp(timestamp):
            return None
        with self._lock:
            timeline = self._timeline(key, field)
            if timeline is None:
                return None
            return timeline.resolve(timestamp)

    def get_current(self, key: str, field: str) -> Optional[str]:
        """Resolve (key, field) at the latest timestamp ever recorded."""
        with self._lock:
            if self._latest is None:
                return None
            return self.get_at(key, field, self._latest)

    def history(self, key: str, field: str) -> list[tuple[int, FieldEvent]]:
        """
        Every event recorded for (key, field), in timestamp order.

        Tombstones are included; an unknown field yields an empty list.
        """
        with self._lock:
            timeline = self._timeline(key, field)
            if timeline is None:
                return []
            return list(timeline.items())

    # --- Scans ---

    def view_at(
        self, key: str, timestamp: int, prefix: Optional[str] = None
    ) -> RecordView:
        """
        Project the live fields of a key as of a timestamp.

        Args:
            key: Record identifier
            timestamp: Query timestamp
            prefix: Optional case-sensitive field-name prefix

        Returns:
            RecordView with fields in ascending name order
        """
        if not _is_timestamp(timestamp):
            return RecordView(key=key, timestamp=timestamp, prefix=prefix)

        with self._lock:
            record = self._records.get(key)
            resolved: dict[str, str] = {}
            if record is not None:
                for name in self._names_with_prefix(key, prefix or ""):
                    value = record[name].resolve(timestamp)
                    if value is not None:
                        resolved[name] = value
        return RecordView(key=key, timestamp=timestamp, fields=resolved, prefix=prefix)

    def scan_at(self, key: str, timestamp: int) -> list[str]:
        """
        List live fields of a key as "field(value)", sorted by field name.

        Unknown keys and keys with no live field yield an empty list.
        """
        return self.view_at(key, timestamp).entries()

    def scan_prefix_at(self, key: str, prefix: str, timestamp: int) -> list[str]:
        """Same as scan_at, restricted to field names starting with prefix."""
        if not isinstance(prefix, str):
            return []
        return self.view_at(key, timestamp, prefix=prefix).entries()

    def keys_at(self, timestamp: int) -> list[str]:
        """Sorted keys that have at least one live field at a timestamp."""
        with self._lock:
            return [
                key for key in sorted(self._records)
                if self.view_at(key, timestamp)
            ]

    def keys(self) -> list[str]:
        """Sorted keys that have ever been written, live or not."""
        with self._lock:
            return sorted(self._records)

    def fields(self, key: str) -> list[str]:
        """Sorted field names ever written under a key."""
        with self._lock:
            return list(self._field_names.get(key, []))

    def __len__(self) -> int:
        """Number of (key, field) timelines."""
        with self._lock:
            return sum(len(record) for record in self._records.values())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records

    # --- Internal ---

    def _timeline(self, key: str, field: str) -> Optional[Timeline]:
        record = self._records.get(key)
        if record is None:
            return None
        return record.get(field)

    def _record(self, key: str, field: str, timestamp: int, event: FieldEvent) -> None:
        with self._lock:
            record = self._records.setdefault(key, {})
            timeline = record.get(field)
            if timeline is None:
                timeline = Timeline()
                record[field] = timeline
                insort(self._field_names.setdefault(key, []), field)
            timeline.record(timestamp, event)
            if self._latest is None or timestamp > self._latest:
                self._latest = timestamp

        if event.is_tombstone:
            logger.debug("Tombstoned %s.%s at %d", key, field, timestamp)
        else:
            logger.debug("Recorded %s.%s at %d (expiry=%s)", key, field, timestamp, event.expiry)

    def _names_with_prefix(self, key: str, prefix: str) -> list[str]:
        names = self._field_names.get(key, [])
        if not prefix:
            return list(names)
        start = bisect_left(names, prefix)
        matched = []
        for name in names[start:]:
            if not name.startswith(prefix):
                break
            matched.append(name)
        return matched

    def _validate_write(
        self, operation: str, key: Any, field: Any, value: Any, timestamp: Any
    ) -> bool:
        if not _is_identifier(key):
            self._reject(operation, "key", f"invalid key {key!r}")
            return False
        if not _is_identifier(field):
            self._reject(operation, "field", f"invalid field {field!r}")
            return False
        if not isinstance(value, str):
            self._reject(operation, "value", f"invalid value {value!r}")
            return False
        if not _is_timestamp(timestamp):
            self._reject(operation, "timestamp", f"invalid timestamp {timestamp!r}")
            return False
        return True

    def _reject(self, operation: str, argument: str, message: str) -> None:
        if self._strict:
            raise InvalidArgumentError(
                f"{operation}: {message}", operation=operation, argument=argument
            )
        logger.debug("Dropped %s: %s", operation, message)
