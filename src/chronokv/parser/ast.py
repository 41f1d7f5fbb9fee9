"""
chronokv AST - Parsed structure of chronokv commands.

Operands are plain strings/ints, or Variable placeholders that are bound
when the command is executed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class CommandType(Enum):
    """Kinds of command in the language."""
    SET = "SET"
    DELETE = "DELETE"
    GET = "GET"
    SCAN = "SCAN"
    HISTORY = "HISTORY"


@dataclass(frozen=True)
class Variable:
    """
    A $name placeholder in a command.

    Represents: $name (stored without the $ prefix)
    """
    name: str

    def __str__(self) -> str:
        return f"${self.name}"


Operand = Union[str, int, Variable]


@dataclass
class SetOperation:
    """
    SET operation.

    Translates to: set_at / set_at_with_ttl, or the snapshot clock when
    no timestamp is given
    """
    key: Operand
    field: Operand
    value: Operand
    timestamp: Optional[Operand] = None
    ttl: Optional[Operand] = None


@dataclass
class DeleteOperation:
    """
    DELETE operation.

    Translates to: delete_at
    """
    key: Operand
    field: Operand
    timestamp: Optional[Operand] = None


@dataclass
class GetOperation:
    """
    GET operation.

    Translates to: get_at, or get_current without a timestamp
    """
    key: Operand
    field: Operand
    timestamp: Optional[Operand] = None


@dataclass
class ScanOperation:
    """
    SCAN operation, optionally restricted to a field-name prefix.

    Translates to: scan_at / scan_prefix_at
    """
    key: Operand
    prefix: Optional[Operand] = None
    timestamp: Optional[Operand] = None


@dataclass
class HistoryOperation:
    """
    HISTORY operation.

    Translates to: TemporalIndex.history
    """
    key: Operand
    field: Operand


@dataclass
class Command:
    """
    Complete parsed command.

    Exactly one operation is set.
    """
    set: Optional[SetOperation] = None
    delete: Optional[DeleteOperation] = None
    get: Optional[GetOperation] = None
    scan: Optional[ScanOperation] = None
    history: Optional[HistoryOperation] = None

    # Source text, for results and logging
    source: str = ""

    # Variables for parameter binding
    variables: dict[str, Any] = field(default_factory=dict)

    @property
    def command_type(self) -> Optional[CommandType]:
        """Return the type of operation in this command."""
        if self.set:
            return CommandType.SET
        elif self.delete:
            return CommandType.DELETE
        elif self.get:
            return CommandType.GET
        elif self.scan:
            return CommandType.SCAN
        elif self.history:
            return CommandType.HISTORY
        return None

    @property
    def operation(self):
        """The single operation carried by this command."""
        return self.set or self.delete or self.get or self.scan or self.history

    @property
    def is_write(self) -> bool:
        return self.command_type in (CommandType.SET, CommandType.DELETE)
