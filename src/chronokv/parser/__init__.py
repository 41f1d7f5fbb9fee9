"""chronokv Parser module - Grammar, AST nodes, and Lark parser."""

from chronokv.parser.ast import (
    Command,
    CommandType,
    SetOperation,
    DeleteOperation,
    GetOperation,
    ScanOperation,
    HistoryOperation,
    Variable,
)
from chronokv.parser.parser import CommandParser, parse

__all__ = [
    "CommandParser",
    "parse",
    "Command",
    "CommandType",
    "SetOperation",
    "DeleteOperation",
    "GetOperation",
    "ScanOperation",
    "HistoryOperation",
    "Variable",
]
