# -*- encoding: utf-8 -*-
"""
Tests for chronokv Timeline and FieldEvent.

- FieldEvent liveness, tombstones, expiry bounds
- Timeline floor lookup with out-of-order inserts
- Same-slot overwrite
"""

import pytest

from chronokv.temporal.timeline import FieldEvent, Timeline


# ── FieldEvent Tests ────────────────────────────────────────────────


class TestFieldEvent:
    """Event slot data model."""

    def test_plain_value_is_live_forever(self):
        event = FieldEvent("Alice")
        assert event.is_tombstone is False
        assert event.is_live_at(10**12) is True

    def test_tombstone(self):
        event = FieldEvent.tombstone()
        assert event.is_tombstone is True
        assert event.value is None
        assert event.is_live_at(0) is False

    def test_expiry_is_inclusive(self):
        event = FieldEvent("temporary", expiry=40)
        assert event.is_live_at(40) is True
        assert event.is_live_at(41) is False

    def test_to_dict(self):
        assert FieldEvent("v").to_dict() == {"value": "v"}
        assert FieldEvent("v", expiry=5).to_dict() == {"value": "v", "expiry": 5}
        assert FieldEvent.tombstone().to_dict() == {"value": None}


# ── Timeline Tests ──────────────────────────────────────────────────


class TestTimeline:
    """Ordered events with floor lookup."""

    @pytest.fixture
    def timeline(self):
        tl = Timeline()
        # Inserted out of timestamp order on purpose
        tl.record(30, FieldEvent("c"))
        tl.record(10, FieldEvent("a"))
        tl.record(20, FieldEvent("b"))
        return tl

    def test_items_are_sorted(self, timeline):
        assert [stamp for stamp, _ in timeline.items()] == [10, 20, 30]
        assert timeline.first_timestamp == 10
        assert timeline.last_timestamp == 30

    def test_floor_exact_match(self, timeline):
        assert timeline.floor(20) == (20, FieldEvent("b"))

    def test_floor_between_events(self, timeline):
        assert timeline.floor(25) == (20, FieldEvent("b"))
        assert timeline.floor(29) == (20, FieldEvent("b"))

    def test_floor_before_first_event(self, timeline):
        assert timeline.floor(9) is None

    def test_floor_after_last_event(self, timeline):
        assert timeline.floor(1000) == (30, FieldEvent("c"))

    def test_resolve(self, timeline):
        assert timeline.resolve(5) is None
        assert timeline.resolve(10) == "a"
        assert timeline.resolve(15) == "a"
        assert timeline.resolve(30) == "c"

    def test_same_slot_overwrite(self, timeline):
        timeline.record(20, FieldEvent("B"))
        assert len(timeline) == 3
        assert timeline.resolve(20) == "B"

    def test_tombstone_hides_until_next_write(self, timeline):
        timeline.record(15, FieldEvent.tombstone())
        assert timeline.resolve(14) == "a"
        assert timeline.resolve(15) is None
        assert timeline.resolve(19) is None
        assert timeline.resolve(20) == "b"

    def test_expired_floor_event(self):
        tl = Timeline()
        tl.record(30, FieldEvent("temporary", expiry=40))
        assert tl.resolve(30) == "temporary"
        assert tl.resolve(40) == "temporary"
        assert tl.resolve(41) is None

    def test_expired_event_does_not_fall_back_to_older_value(self):
        tl = Timeline()
        tl.record(10, FieldEvent("old"))
        tl.record(20, FieldEvent("new", expiry=25))
        assert tl.resolve(24) == "new"
        assert tl.resolve(26) is None

    def test_contains(self, timeline):
        assert 10 in timeline
        assert 11 not in timeline

    def test_negative_timestamps(self):
        tl = Timeline()
        tl.record(-5, FieldEvent("neg"))
        assert tl.resolve(-10) is None
        assert tl.resolve(-5) == "neg"
        assert tl.resolve(0) == "neg"
