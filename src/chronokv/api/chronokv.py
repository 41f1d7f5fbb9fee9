"""
chronokv main API.

This module provides the high-level interface for running chronokv commands
against a TemporalIndex and its SnapshotStore.

Usage:
    from chronokv import ChronoKV

    kv = ChronoKV()
    kv.execute("SET user1 name Alice AT 10")
    kv.execute("GET user1 name AT 10").value       # "Alice"
    kv.execute("SCAN user1 PREFIX $p AT 25", variables={"p": "a"}).entries

Commands without AT run at the store's current time: writes take the next
tick of the snapshot clock, reads query the latest recorded timestamp.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from hio.help import Deck

from chronokv.config import StoreConfig
from chronokv.exceptions import ChronoKVError, CommandExecutionError
from chronokv.parser import Command, CommandParser, CommandType, Variable
from chronokv.snapshot import SnapshotStore
from chronokv.temporal import FieldEvent, TemporalIndex

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Result of a chronokv command execution.

    Provides a unified result format for all command types. ``ok`` means:
    SET - the value is visible at its write timestamp (the write was kept);
    DELETE - a tombstone was recorded; GET - a value was found;
    SCAN / HISTORY - at least one entry was returned.
    """
    command: str
    command_type: CommandType
    ok: bool = False
    timestamp: Optional[int] = None
    value: Optional[str] = None
    entries: list[str] = field(default_factory=list)
    history: list[tuple[int, FieldEvent]] = field(default_factory=list)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return self.ok

    def to_line(self) -> str:
        """Render the result as one line of harness output."""
        if self.command_type == CommandType.SET:
            return "OK" if self.ok else "IGNORED"
        if self.command_type == CommandType.DELETE:
            return "true" if self.ok else "false"
        if self.command_type == CommandType.GET:
            return self.value if self.value is not None else "(nil)"
        if self.command_type == CommandType.SCAN:
            return "[" + ", ".join(self.entries) + "]"
        parts = []
        for stamp, event in self.history:
            if event.is_tombstone:
                parts.append(f"{stamp}:<deleted>")
            elif event.expiry is not None:
                parts.append(f"{stamp}:{event.value} (until {event.expiry})")
            else:
                parts.append(f"{stamp}:{event.value}")
        return "; ".join(parts) if parts else "(empty)"

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return {
            "command": self.command,
            "type": self.command_type.value,
            "ok": self.ok,
            "timestamp": self.timestamp,
            "value": self.value,
            "entries": list(self.entries),
            "history": [
                {"timestamp": stamp, **event.to_dict()} for stamp, event in self.history
            ],
        }


class ChronoKV:
    """
    chronokv command interface over a TemporalIndex.

    Offers a command queue for callers that confine the store to one owning
    thread: other threads push commands, the owner calls service().

    Usage:
        kv = ChronoKV()

        # Synchronous command
        result = kv.execute("GET user1 name AT 10")

        # Queued commands, drained by the owning thread
        kv.commands.push(("cmd-1", "SCAN user1 AT 25", None))
        kv.service()
        command_id, result = kv.results.pull()
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        index: Optional[TemporalIndex] = None,
    ):
        """
        Initialize the store.

        Args:
            config: Store configuration (defaults to StoreConfig())
            index: Existing index to operate on. Built from config if omitted.
        """
        self._config = config or StoreConfig()
        self._index = index if index is not None else TemporalIndex(
            strict=self._config.strict,
            thread_safe=self._config.thread_safe,
        )
        self._snapshot = SnapshotStore(self._index)
        self._parser = CommandParser()

        # Deck queues for confining the store to one owning thread
        self.commands = Deck()  # Input: (command_id, command_string, variables)
        self.results = Deck()   # Output: (command_id, CommandResult or ChronoKVError)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def index(self) -> TemporalIndex:
        """Direct access to the temporal index."""
        return self._index

    @property
    def snapshot(self) -> SnapshotStore:
        """Current-value view of the same index."""
        return self._snapshot

    def parse(self, command_string: str) -> Command:
        """
        Parse a command without executing.

        Raises:
            CommandParseError: If the string is not a valid command
        """
        return self._parser.parse(command_string)

    def execute(
        self,
        command_string: str,
        variables: Optional[dict] = None,
    ) -> CommandResult:
        """
        Parse and execute one command.

        Args:
            command_string: The command text
            variables: Optional dict of variable bindings ($name -> value)

        Returns:
            CommandResult describing the outcome

        Raises:
            CommandParseError: If the command cannot be parsed
            CommandExecutionError: If a $variable is unbound or not usable
        """
        command = self._parser.parse(command_string, variables)
        return self.run(command)

    def execute_script(self, lines: Iterable[str], variables: Optional[dict] = None) -> list[CommandResult]:
        """Execute one command per non-blank, non-comment line."""
        results = []
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("--"):
                continue
            results.append(self.execute(stripped, variables))
        return results

    def run(self, command: Command) -> CommandResult:
        """Execute an already parsed command."""
        logger.debug("Executing %s", command.source or command.command_type)
        variables = command.variables or {}

        if command.set:
            return self._execute_set(command, variables)
        elif command.delete:
            return self._execute_delete(command, variables)
        elif command.get:
            return self._execute_get(command, variables)
        elif command.scan:
            return self._execute_scan(command, variables)
        elif command.history:
            return self._execute_history(command, variables)

        raise CommandExecutionError(f"Unsupported command: {command.source!r}")

    def service(self) -> int:
        """
        Drain the commands Deck, pushing (command_id, outcome) onto results.

        A command that fails to parse or execute yields its ChronoKVError
        as the outcome.

        Returns:
            Number of commands processed
        """
        processed = 0
        while self.commands:
            command_id, command_string, variables = self.commands.pull()
            try:
                outcome = self.execute(command_string, variables)
            except ChronoKVError as e:
                logger.warning("Command %s failed: %s", command_id, e)
                outcome = e
            self.results.push((command_id, outcome))
            processed += 1
        return processed

    # --- Execution ---

    def _execute_set(self, command: Command, variables: dict) -> CommandResult:
        op = command.set
        key = self._bind(op.key, variables)
        field_name = self._bind(op.field, variables)
        value = self._bind(op.value, variables)
        ttl = self._bind_int(op.ttl, variables, "TTL")
        timestamp = self._bind_int(op.timestamp, variables, "AT")
        if timestamp is None:
            timestamp = self._snapshot.tick()

        if ttl is None:
            self._index.set_at(key, field_name, value, timestamp)
        else:
            self._index.set_at_with_ttl(key, field_name, value, timestamp, ttl)

        kept = (
            value is not None
            and (ttl is None or ttl >= 0)
            and self._index.get_at(key, field_name, timestamp) == value
        )
        return CommandResult(
            command=command.source,
            command_type=CommandType.SET,
            ok=kept,
            timestamp=timestamp,
            value=value if kept else None,
        )

    def _execute_delete(self, command: Command, variables: dict) -> CommandResult:
        op = command.delete
        key = self._bind(op.key, variables)
        field_name = self._bind(op.field, variables)
        timestamp = self._bind_int(op.timestamp, variables, "AT")
        if timestamp is None:
            timestamp = self._snapshot.tick()

        deleted = self._index.delete_at(key, field_name, timestamp)
        return CommandResult(
            command=command.source,
            command_type=CommandType.DELETE,
            ok=deleted,
            timestamp=timestamp,
        )

    def _execute_get(self, command: Command, variables: dict) -> CommandResult:
        op = command.get
        key = self._bind(op.key, variables)
        field_name = self._bind(op.field, variables)
        timestamp = self._read_timestamp(op.timestamp, variables)

        value = None
        if timestamp is not None:
            value = self._index.get_at(key, field_name, timestamp)
        return CommandResult(
            command=command.source,
            command_type=CommandType.GET,
            ok=value is not None,
            timestamp=timestamp,
            value=value,
        )

    def _execute_scan(self, command: Command, variables: dict) -> CommandResult:
        op = command.scan
        key = self._bind(op.key, variables)
        prefix = self._bind(op.prefix, variables)
        timestamp = self._read_timestamp(op.timestamp, variables)

        entries: list[str] = []
        if timestamp is not None:
            if prefix is None:
                entries = self._index.scan_at(key, timestamp)
            else:
                entries = self._index.scan_prefix_at(key, prefix, timestamp)
        return CommandResult(
            command=command.source,
            command_type=CommandType.SCAN,
            ok=bool(entries),
            timestamp=timestamp,
            entries=entries,
        )

    def _execute_history(self, command: Command, variables: dict) -> CommandResult:
        op = command.history
        key = self._bind(op.key, variables)
        field_name = self._bind(op.field, variables)

        history = self._index.history(key, field_name)
        return CommandResult(
            command=command.source,
            command_type=CommandType.HISTORY,
            ok=bool(history),
            history=history,
        )

    # --- Variable binding ---

    def _read_timestamp(self, operand: Any, variables: dict) -> Optional[int]:
        timestamp = self._bind_int(operand, variables, "AT")
        if timestamp is None:
            return self._snapshot.now
        return timestamp

    def _bind(self, operand: Any, variables: dict) -> Any:
        """Resolve a $variable operand; literals pass through."""
        if not isinstance(operand, Variable):
            return operand
        if operand.name not in variables:
            raise CommandExecutionError(f"Unbound variable {operand}")
        return variables[operand.name]

    def _bind_int(self, operand: Any, variables: dict, clause: str) -> Optional[int]:
        value = self._bind(operand, variables)
        if value is None or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise CommandExecutionError(
                f"{clause} expects an integer, got {value!r}"
            ) from e
