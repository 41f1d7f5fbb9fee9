"""
Tests for chronokv Parser.

Tests the Lark-based parser for chronokv command strings.
"""

import pytest

from chronokv.exceptions import CommandParseError
from chronokv.parser import CommandParser, parse
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


class TestCommandParser:
    """Tests for CommandParser class."""

    @pytest.fixture
    def parser(self):
        """Create a parser instance."""
        return CommandParser()

    # --- SET ---

    def test_parse_set(self, parser):
        result = parser.parse("SET user1 name Alice AT 10")

        assert isinstance(result, Command)
        assert result.command_type == CommandType.SET
        assert result.set == SetOperation(
            key="user1", field="name", value="Alice", timestamp=10, ttl=None
        )
        assert result.is_write is True

    def test_parse_set_with_ttl(self, parser):
        result = parser.parse("SET user1 temp temporary AT 30 TTL 10")

        assert result.set.timestamp == 30
        assert result.set.ttl == 10

    def test_parse_set_without_timestamp(self, parser):
        result = parser.parse("SET user1 name Alice")

        assert result.set.timestamp is None
        assert result.set.ttl is None

    def test_parse_set_ttl_without_timestamp(self, parser):
        result = parser.parse("SET k f v TTL 5")

        assert result.set.timestamp is None
        assert result.set.ttl == 5

    def test_numeric_value_keeps_literal_text(self, parser):
        result = parser.parse("SET user1 age 030 AT 20")

        assert result.set.value == "030"

    def test_email_value(self, parser):
        result = parser.parse("SET user1 email alice@example.com AT 15")

        assert result.set.value == "alice@example.com"

    def test_quoted_operands(self, parser):
        result = parser.parse("SET 'user:1' note \"two words\"")

        assert result.set.key == "user:1"
        assert result.set.value == "two words"

    def test_negative_ttl_parses(self, parser):
        result = parser.parse("SET k f v AT 1 TTL -1")

        assert result.set.ttl == -1

    # --- DELETE / GET ---

    def test_parse_delete(self, parser):
        result = parser.parse("DELETE user1 email AT 50")

        assert result.command_type == CommandType.DELETE
        assert result.delete == DeleteOperation(key="user1", field="email", timestamp=50)

    def test_parse_get(self, parser):
        result = parser.parse("GET user1 name AT 5")

        assert result.command_type == CommandType.GET
        assert result.get == GetOperation(key="user1", field="name", timestamp=5)
        assert result.is_write is False

    def test_keywords_case_insensitive(self, parser):
        result = parser.parse("get user1 name at 10")

        assert result.get.timestamp == 10

    def test_keyword_like_identifiers(self, parser):
        result = parser.parse("GET at prefix AT 3")

        assert result.get.key == "at"
        assert result.get.field == "prefix"
        assert result.get.timestamp == 3

    @pytest.mark.parametrize("command, key, field_name, value", [
        ("SET user1 at home AT 5", "user1", "at", "home"),
        ("SET user1 prefix x AT 5", "user1", "prefix", "x"),
        ("SET user1 name at AT 5", "user1", "name", "at"),
        ("SET user1 name TTL AT 5", "user1", "name", "TTL"),
        ("SET get set delete", "get", "set", "delete"),
        ("SET 42 f v AT 5", "42", "f", "v"),
        ("SET user1 7 007 AT 5", "user1", "7", "007"),
    ])
    def test_keyword_and_numeric_operands(self, parser, command, key, field_name, value):
        result = parser.parse(command)

        assert result.set.key == key
        assert result.set.field == field_name
        assert result.set.value == value

    def test_keyword_operands_with_clauses(self, parser):
        result = parser.parse("SCAN history PREFIX ttl AT 9")

        assert result.scan == ScanOperation(key="history", prefix="ttl", timestamp=9)

    def test_attached_keyword_text_is_a_name(self, parser):
        result = parser.parse("GET attic prefixes AT 3")

        assert result.get.key == "attic"
        assert result.get.field == "prefixes"

    # --- SCAN / HISTORY ---

    def test_parse_scan(self, parser):
        result = parser.parse("SCAN user1 AT 25")

        assert result.scan == ScanOperation(key="user1", prefix=None, timestamp=25)

    def test_parse_scan_prefix(self, parser):
        result = parser.parse("SCAN user1 PREFIX a AT 25")

        assert result.command_type == CommandType.SCAN
        assert result.scan == ScanOperation(key="user1", prefix="a", timestamp=25)

    def test_parse_scan_empty_prefix(self, parser):
        result = parser.parse("SCAN user1 PREFIX ''")

        assert result.scan.prefix == ""
        assert result.scan.timestamp is None

    def test_parse_history(self, parser):
        result = parser.parse("HISTORY user1 email")

        assert result.command_type == CommandType.HISTORY
        assert result.history == HistoryOperation(key="user1", field="email")
        assert result.operation is result.history

    # --- Variables ---

    def test_parse_variables(self, parser):
        result = parser.parse(
            "GET $key name AT $ts", variables={"key": "user1", "ts": 10}
        )

        assert result.get.key == Variable("key")
        assert result.get.timestamp == Variable("ts")
        assert result.variables == {"key": "user1", "ts": 10}

    def test_quoted_dollar_is_literal(self, parser):
        result = parser.parse("SET k f '$notavar'")

        assert result.set.value == "$notavar"

    # --- Misc ---

    def test_comment_and_whitespace(self, parser):
        result = parser.parse("  GET user1 name AT 10   -- who was it?")

        assert result.get.timestamp == 10
        assert result.source == "GET user1 name AT 10   -- who was it?"

    @pytest.mark.parametrize("bad", [
        "",
        "SET user1 name",
        "GET user1",
        "SCAN",
        "FROB user1 name",
        "GET user1 name AT ten",
        "SET k f v TTL 5 AT 1",
    ])
    def test_invalid_commands(self, parser, bad):
        with pytest.raises(CommandParseError) as exc_info:
            parser.parse(bad)
        assert exc_info.value.command == bad


class TestParseFunction:
    """Module-level convenience function."""

    def test_parse(self):
        result = parse("SCAN user1 PREFIX a AT 25")
        assert result.scan.prefix == "a"

    def test_parse_error_to_dict(self):
        with pytest.raises(CommandParseError) as exc_info:
            parse("GET")
        d = exc_info.value.to_dict()
        assert d["error"] == "CommandParseError"
        assert d["command"] == "GET"
