"""chronokv API module - High-level interface for chronokv commands."""

from chronokv.api.chronokv import ChronoKV, CommandResult

__all__ = [
    "ChronoKV",
    "CommandResult",
]
