# -*- encoding: utf-8 -*-
"""
chronokv Exceptions.

Lookups never raise: a missing key, a tombstoned field and an expired value
are all reported as ``None``. The exceptions below cover the command language
and the opt-in strict mode only.
"""

from typing import Optional


class ChronoKVError(Exception):
    """Base exception for all chronokv errors."""
    pass


class CommandParseError(ChronoKVError):
    """Raised when a command string cannot be parsed."""

    def __init__(self, message: str, command: str = "", column: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.column = column

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "CommandParseError",
            "message": str(self),
            "command": self.command,
            "column": self.column,
        }


class CommandExecutionError(ChronoKVError):
    """Raised when a parsed command cannot be executed."""
    pass


class InvalidArgumentError(ChronoKVError):
    """
    Raised for rejected writes when the store runs in strict mode.

    By default invalid writes are dropped silently; ``StoreConfig.strict``
    turns the drop into this exception.

    Attributes:
        operation: Name of the rejected operation (e.g. "set_at")
        argument: Name of the offending argument
    """

    def __init__(self, message: str, operation: str = "", argument: str = ""):
        super().__init__(message)
        self.operation = operation
        self.argument = argument

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "InvalidArgumentError",
            "message": str(self),
            "operation": self.operation,
            "argument": self.argument,
        }
