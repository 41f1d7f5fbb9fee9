"""
chronokv Parser - Lark-based parser for the chronokv command language.

Parses command strings into Command AST nodes that the ChronoKV facade
executes against the temporal index.
"""

from typing import Optional

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from chronokv.exceptions import CommandParseError
from chronokv.parser.grammar import get_grammar
from chronokv.parser.ast import (
    Command,
    SetOperation,
    DeleteOperation,
    GetOperation,
    ScanOperation,
    HistoryOperation,
    Variable,
)


class CommandTransformer(Transformer):
    """
    Lark Transformer that converts parse tree to chronokv AST nodes.
    """

    # --- Terminal handling ---

    def NAME(self, token):
        return str(token)

    def VARIABLE(self, token):
        return Variable(name=str(token)[1:])

    def STRING(self, token):
        # Remove surrounding quotes
        s = str(token)
        return s[1:-1]

    # --- Operands ---

    def keyword(self, items):
        # Keyword spelling as written ("at" stays "at")
        return str(items[0])

    def ident(self, items):
        return self._operand(items[0])

    def value(self, items):
        return self._operand(items[0])

    @staticmethod
    def _operand(item):
        if isinstance(item, Variable):
            return item
        # INT operands keep their literal text ("007" stays "007")
        return str(item)

    def _number(self, item):
        return item if isinstance(item, Variable) else int(item)

    # --- Clauses ---

    def at_clause(self, items):
        return ("at", self._number(items[0]))

    def ttl_clause(self, items):
        return ("ttl", self._number(items[0]))

    def prefix_clause(self, items):
        return ("prefix", items[0])

    @staticmethod
    def _clauses(items) -> dict:
        return {item[0]: item[1] for item in items if isinstance(item, tuple)}

    # --- Commands ---

    def set_cmd(self, items):
        clauses = self._clauses(items[3:])
        return SetOperation(
            key=items[0],
            field=items[1],
            value=items[2],
            timestamp=clauses.get("at"),
            ttl=clauses.get("ttl"),
        )

    def delete_cmd(self, items):
        clauses = self._clauses(items[2:])
        return DeleteOperation(key=items[0], field=items[1], timestamp=clauses.get("at"))

    def get_cmd(self, items):
        clauses = self._clauses(items[2:])
        return GetOperation(key=items[0], field=items[1], timestamp=clauses.get("at"))

    def scan_cmd(self, items):
        clauses = self._clauses(items[1:])
        return ScanOperation(
            key=items[0],
            prefix=clauses.get("prefix"),
            timestamp=clauses.get("at"),
        )

    def history_cmd(self, items):
        return HistoryOperation(key=items[0], field=items[1])

    # --- Top-level command ---

    def command(self, items):
        op = items[0]
        command = Command()
        if isinstance(op, SetOperation):
            command.set = op
        elif isinstance(op, DeleteOperation):
            command.delete = op
        elif isinstance(op, GetOperation):
            command.get = op
        elif isinstance(op, ScanOperation):
            command.scan = op
        elif isinstance(op, HistoryOperation):
            command.history = op
        return command

    def start(self, items):
        return items[0]


class CommandParser:
    """
    chronokv command parser using Lark.

    Parses command strings into Command AST nodes.

    Example:
        parser = CommandParser()
        command = parser.parse("GET user1 name AT 10")
    """

    def __init__(self):
        self._parser = Lark(
            get_grammar(),
            parser='lalr',
            transformer=CommandTransformer(),
        )

    def parse(self, command_string: str, variables: Optional[dict] = None) -> Command:
        """
        Parse a command string into an AST.

        Args:
            command_string: The command to parse
            variables: Optional dict of variable bindings ($name -> value)

        Returns:
            Command AST node

        Raises:
            CommandParseError: If the string is not a valid command
        """
        try:
            result = self._parser.parse(command_string)
        except UnexpectedInput as e:
            raise CommandParseError(
                f"Invalid command: {command_string.strip()!r}",
                command=command_string,
                column=getattr(e, "column", None),
            ) from e

        result.source = command_string.strip()
        if variables:
            result.variables = variables

        return result


def parse(command_string: str, variables: Optional[dict] = None) -> Command:
    """
    Convenience function to parse a command.

    For repeated parsing, use CommandParser directly; building the LALR
    tables is the expensive part.
    """
    parser = CommandParser()
    return parser.parse(command_string, variables)
