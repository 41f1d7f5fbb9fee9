# -*- encoding: utf-8 -*-
"""
chronokv Timeline - Ordered event history for one (key, field) pair.

A timeline maps timestamps to FieldEvents. Timestamps are kept in a sorted
list so the floor lookup (latest event at or before a query timestamp) is a
single bisect. Writes may arrive in any timestamp order.

Key insight: history is append-only. A delete is just another event whose
value is None, so every past state stays answerable.
"""

from bisect import bisect_right, insort
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class FieldEvent:
    """
    Content of one timeline slot.

    Attributes:
        value: Written value, or None for a tombstone
        expiry: Last timestamp (inclusive) at which the value is live,
            or None when the value never expires
    """
    value: Optional[str] = None
    expiry: Optional[int] = None

    @property
    def is_tombstone(self) -> bool:
        """Whether this event records a deletion."""
        return self.value is None

    def is_live_at(self, timestamp: int) -> bool:
        """Whether this event yields a value for a query at timestamp."""
        if self.value is None:
            return False
        return self.expiry is None or timestamp <= self.expiry

    def to_dict(self) -> dict:
        """Serialize to dict for command results."""
        result = {"value": self.value}
        if self.expiry is not None:
            result["expiry"] = self.expiry
        return result

    @classmethod
    def tombstone(cls) -> "FieldEvent":
        """Create a deletion marker."""
        return cls(value=None, expiry=None)


class Timeline:
    """
    Ordered mapping from timestamp to FieldEvent.

    At most one event exists per timestamp; recording at an occupied
    timestamp replaces the slot.

    Usage:
        timeline = Timeline()
        timeline.record(10, FieldEvent("Alice"))
        timeline.record(5, FieldEvent("Al"))
        timeline.floor(7)   # (5, FieldEvent("Al"))
        timeline.resolve(12)  # "Alice"
    """

    def __init__(self):
        self._stamps: list[int] = []
        self._events: dict[int, FieldEvent] = {}

    def record(self, timestamp: int, event: FieldEvent) -> None:
        """
        Store an event at a timestamp, replacing any event already there.

        Args:
            timestamp: Slot to write
            event: Event to store
        """
        if timestamp not in self._events:
            insort(self._stamps, timestamp)
        self._events[timestamp] = event

    def floor(self, timestamp: int) -> Optional[tuple[int, FieldEvent]]:
        """
        Find the latest event recorded at or before a timestamp.

        Args:
            timestamp: Query timestamp

        Returns:
            (event_timestamp, event) or None if every event is later
        """
        idx = bisect_right(self._stamps, timestamp)
        if idx == 0:
            return None
        stamp = self._stamps[idx - 1]
        return stamp, self._events[stamp]

    def resolve(self, timestamp: int) -> Optional[str]:
        """
        Resolve the field's value as of a timestamp.

        Returns None when there is no event at or before the timestamp,
        when the floor event is a tombstone, or when it has expired.
        """
        entry = self.floor(timestamp)
        if entry is None:
            return None
        _, event = entry
        if not event.is_live_at(timestamp):
            return None
        return event.value

    @property
    def first_timestamp(self) -> Optional[int]:
        return self._stamps[0] if self._stamps else None

    @property
    def last_timestamp(self) -> Optional[int]:
        return self._stamps[-1] if self._stamps else None

    def items(self) -> Iterator[tuple[int, FieldEvent]]:
        """Iterate (timestamp, event) pairs in timestamp order."""
        for stamp in self._stamps:
            yield stamp, self._events[stamp]

    def __len__(self) -> int:
        return len(self._stamps)

    def __contains__(self, timestamp: int) -> bool:
        return timestamp in self._events

    def __repr__(self) -> str:
        return f"Timeline(events={len(self._stamps)})"
