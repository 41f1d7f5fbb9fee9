"""
chronokv Temporal - Point-in-time field resolution.

This module provides:
- FieldEvent: One write or tombstone in a field's history
- Timeline: Ordered events for one (key, field) with floor lookup
- TemporalIndex: key -> field -> Timeline with get/set/delete/scan at a timestamp
- RecordView: Live fields of a key at a timestamp
"""

from chronokv.temporal.timeline import FieldEvent, Timeline
from chronokv.temporal.index import TemporalIndex
from chronokv.temporal.view import RecordView, format_entry

__all__ = [
    "FieldEvent",
    "Timeline",
    "TemporalIndex",
    "RecordView",
    "format_entry",
]
