"""
chronokv - Key/field/value store with point-in-time queries

Every write to a field is kept in that field's timeline, so reads can ask
what a field held as of any timestamp, honoring TTL expiry and deletions
recorded at specific timestamps.

Components:
- TemporalIndex: set_at / set_at_with_ttl / delete_at / get_at / scan_at / scan_prefix_at
- SnapshotStore: current-value set / get / delete / scan over the same index
- ChronoKV: command language front end (SET, GET, DELETE, SCAN, HISTORY)

Usage:
    from chronokv import TemporalIndex

    index = TemporalIndex()
    index.set_at("user1", "name", "Alice", 10)
    index.get_at("user1", "name", 10)    # "Alice"
    index.get_at("user1", "name", 5)     # None

    # Or run commands
    from chronokv import ChronoKV
    kv = ChronoKV()
    kv.execute("SCAN user1 PREFIX a AT 25")

    # Or run the harness
    # python -m chronokv --demo
"""

from chronokv.api.chronokv import ChronoKV, CommandResult
from chronokv.config import StoreConfig
from chronokv.exceptions import (
    ChronoKVError,
    CommandParseError,
    CommandExecutionError,
    InvalidArgumentError,
)
from chronokv.snapshot import SnapshotStore
from chronokv.temporal import (
    FieldEvent,
    Timeline,
    TemporalIndex,
    RecordView,
)

__all__ = [
    # Main API
    "ChronoKV",
    "CommandResult",
    "StoreConfig",
    # Stores
    "TemporalIndex",
    "SnapshotStore",
    # Data model
    "FieldEvent",
    "Timeline",
    "RecordView",
    # Errors
    "ChronoKVError",
    "CommandParseError",
    "CommandExecutionError",
    "InvalidArgumentError",
]

__version__ = "0.1.0"
