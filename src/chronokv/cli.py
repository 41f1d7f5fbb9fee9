"""
chronokv command line harness.

Usage:
    python -m chronokv                   # REPL, one command per line on stdin
    python -m chronokv --script cmds.kv  # Execute a file of commands
    python -m chronokv --demo            # Replay the walkthrough scenarios
    python -m chronokv --json ...        # Print results as JSON objects
"""

import argparse
import json
import logging
import sys
from typing import Iterable, Optional, TextIO

from chronokv.api import ChronoKV, CommandResult
from chronokv.config import StoreConfig
from chronokv.exceptions import ChronoKVError

# Temporal walkthrough: every command carries its own timestamp
DEMO_TEMPORAL = [
    "SET user1 name Alice AT 10",
    "GET user1 name AT 10",
    "GET user1 name AT 5",
    "SET user1 email alice@example.com AT 15",
    "SET user1 age 30 AT 20",
    "SCAN user1 AT 25",
    "SET user1 temp temporary AT 30 TTL 10",
    "GET user1 temp AT 35",
    "GET user1 temp AT 45",
    "SCAN user1 PREFIX a AT 25",
    "DELETE user1 email AT 50",
    "DELETE user1 email AT 55",
    "GET user1 email AT 55",
    "GET user1 email AT 45",
    "DELETE user1 temp AT 45",
    "HISTORY user1 email",
]

# Current-value walkthrough: no timestamps, the store clock advances per write
DEMO_SNAPSHOT = [
    "SET 'user:1' name Alice",
    "SET 'user:1' email alice@example.com",
    "GET 'user:1' name",
    "GET 'user:2' name",
    "GET 'user:1' unknown",
    "SET 'user:1' name Alicia",
    "GET 'user:1' name",
    "DELETE 'user:1' email",
    "DELETE 'user:1' email",
    "DELETE unknown field",
    "DELETE 'user:1' name",
    "GET 'user:1' name",
    "SET 'user:1' name Alice",
    "SET 'user:1' email alice@example.com",
    "SET 'user:1' age 30",
    "SET 'user:1' address Wonderland",
    "SCAN 'user:1'",
    "SCAN 'user:1' PREFIX a",
    "SCAN nope",
    "SCAN nope PREFIX x",
]


def _emit(result: CommandResult, out: TextIO, as_json: bool) -> None:
    if as_json:
        out.write(json.dumps(result.to_dict()) + "\n")
    else:
        out.write(f"{result.command} -> {result.to_line()}\n")


def run_commands(
    kv: ChronoKV,
    lines: Iterable[str],
    out: TextIO,
    as_json: bool = False,
    stop_on_error: bool = False,
) -> int:
    """
    Execute commands line by line, writing one output line per command.

    Returns:
        Number of commands that raised a ChronoKVError
    """
    failures = 0
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        try:
            result = kv.execute(stripped)
        except ChronoKVError as e:
            failures += 1
            out.write(f"{stripped} -> ERROR: {e}\n")
            if stop_on_error:
                break
            continue
        _emit(result, out, as_json)
    return failures


def run_demo(kv: ChronoKV, out: TextIO, as_json: bool = False) -> int:
    """Replay the temporal and current-value walkthroughs on separate stores."""
    out.write("Temporal queries\n\n")
    failures = run_commands(kv, DEMO_TEMPORAL, out, as_json)
    out.write("\nCurrent values\n\n")
    snapshot_kv = ChronoKV(config=kv.config)
    failures += run_commands(snapshot_kv, DEMO_SNAPSHOT, out, as_json)
    return failures


def main(argv: Optional[list[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    """Main CLI entry point."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    parser = argparse.ArgumentParser(
        prog="chronokv",
        description="chronokv - key/field/value store with point-in-time queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  SET <key> <field> <value> [AT <ts>] [TTL <ttl>]
  DELETE <key> <field> [AT <ts>]
  GET <key> <field> [AT <ts>]
  SCAN <key> [PREFIX <prefix>] [AT <ts>]
  HISTORY <key> <field>
        """
    )

    parser.add_argument(
        "--script", "-f",
        metavar="FILE",
        help="Execute commands from FILE"
    )

    parser.add_argument(
        "--demo", "-d",
        action="store_true",
        help="Run the walkthrough scenarios"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Report invalid writes as errors instead of ignoring them"
    )

    parser.add_argument(
        "--log-level",
        help="Logging level (default: CHRONOKV_LOG_LEVEL or WARNING)"
    )

    args = parser.parse_args(argv)

    config = StoreConfig.from_env()
    if args.strict:
        config.strict = True
    if args.log_level:
        config.log_level = args.log_level.upper()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    kv = ChronoKV(config=config)

    if args.demo:
        failures = run_demo(kv, stdout, args.json)
    elif args.script:
        with open(args.script, encoding="utf-8") as f:
            failures = run_commands(kv, f, stdout, args.json)
    else:
        failures = run_commands(kv, stdin, stdout, args.json)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
