"""Entry point for python -m iterm_mcp.

Runs the MCP server over stdio by default; subcommands run single bridge
operations from a shell.

Usage:
    # Serve MCP over stdio
    python -m iterm_mcp

    # One-off operations
    python -m iterm_mcp list-sessions
    python -m iterm_mcp read --session SESSION_ID --lines 20
    python -m iterm_mcp send-key C --session SESSION_ID
    python -m iterm_mcp write "make test" --session SESSION_ID
    python -m iterm_mcp create-window --profile Default
    python -m iterm_mcp create-tab --window-id 1234
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from iterm_mcp.api import ItermBridge
from iterm_mcp.config import load_config
from iterm_mcp.exceptions import ItermMcpError
from iterm_mcp.logging_config import setup_logging
from iterm_mcp.models import AppConfig


def _setup_logging(args: argparse.Namespace, config: AppConfig) -> None:
    """Configure logging based on command-line arguments."""
    if args.debug:
        setup_logging(
            level="DEBUG",
            log_to_console=True,
            log_to_file=not args.no_log_file,
            debug_modules=args.debug_module,
        )
    else:
        setup_logging(
            level=args.log_level or config.settings.log_level,
            log_to_console=False,
            log_to_file=not args.no_log_file,
            debug_modules=args.debug_module,
        )


def _print_json(data: Any) -> None:
    """Print data as JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def _print_sessions_table(rows: list[dict[str, Any]]) -> None:
    table = Table(show_edge=False, header_style="bold")
    for column in ("Session", "Name", "Window", "Tab", "TTY", "Profile", "Current", "Busy"):
        table.add_column(column)
    for row in rows:
        table.add_row(
            row["session_id"],
            row["name"],
            f"{row['window']} ({row['window_id']})",
            str(row["tab_index"]),
            row["tty"],
            row["profile"],
            "*" if row["is_current"] else "",
            "yes" if row["is_processing"] else "",
        )
    Console().print(table)


# =============================================================================
# CLI Command Handlers
# =============================================================================


async def cmd_list_sessions(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle list-sessions command."""
    rows = [s.to_dict() for s in await bridge.list_sessions()]
    if args.json:
        _print_json({"sessions": rows})
    elif not rows:
        print("No sessions found.")
    else:
        _print_sessions_table(rows)
    return 0


async def cmd_read(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle read command."""
    print(await bridge.read_output(args.session, args.lines))
    return 0


async def cmd_send_key(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle send-key command."""
    descriptor = await bridge.send_key(args.key, args.session)
    if args.json:
        _print_json(
            {"key": descriptor.label, "code": descriptor.code, "session_id": args.session}
        )
    else:
        suffix = f" (session: {args.session})" if args.session else ""
        print(f"Sent key: {descriptor.label}{suffix}")
    return 0


async def cmd_write(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle write command."""
    result = await bridge.write_to_terminal(args.text, args.session)
    if args.json:
        _print_json({"session_id": result.session_id, "output_lines": result.output_lines})
    else:
        print(f"{result.output_lines} lines were output (session: {result.session_id})")
    return 0


async def cmd_create_window(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle create-window command."""
    result = await bridge.create_window(args.profile)
    _print_json({"message": "Created new window", **result.to_dict()})
    return 0


async def cmd_create_tab(bridge: ItermBridge, args: argparse.Namespace) -> int:
    """Handle create-tab command."""
    result = await bridge.create_tab(args.window_id, args.profile)
    _print_json({"message": "Created new tab", **result.to_dict()})
    return 0


COMMANDS = {
    "list-sessions": cmd_list_sessions,
    "read": cmd_read,
    "send-key": cmd_send_key,
    "write": cmd_write,
    "create-window": cmd_create_window,
    "create-tab": cmd_create_tab,
}


def _run_async(coro: Any) -> int:
    """Run an async coroutine and return exit code."""
    return asyncio.run(coro)


# =============================================================================
# Argument Parser Setup
# =============================================================================


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="iterm-mcp",
        description="Control iTerm2 sessions through AppleScript, as an MCP server or CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve MCP tools over stdio
  python -m iterm_mcp serve

  # List sessions and read from one
  python -m iterm_mcp list-sessions
  python -m iterm_mcp read --session SESSION_ID --lines 20

  # Interrupt a running command
  python -m iterm_mcp send-key C --session SESSION_ID
""",
    )

    # Global arguments
    parser.add_argument("--debug", action="store_true", help="Log DEBUG to stderr")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default from config)",
    )
    parser.add_argument("--no-log-file", action="store_true", help="Disable file logging")
    parser.add_argument(
        "--debug-module",
        action="append",
        default=[],
        metavar="MODULE",
        help="Log MODULE (e.g. control, sessions) at DEBUG; repeatable",
    )
    parser.add_argument("--config", help="Path to config.json")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("serve", help="Run the MCP server over stdio (default)")

    list_parser = subparsers.add_parser("list-sessions", help="List all iTerm2 sessions")
    _add_common_args(list_parser)

    read_parser = subparsers.add_parser("read", help="Read a session's output")
    read_parser.add_argument("--session", help="Session ID (default: active session)")
    read_parser.add_argument("--lines", type=int, help="Number of trailing lines")

    key_parser = subparsers.add_parser("send-key", help="Send a control character or special key")
    key_parser.add_argument("key", help="A-Z for Ctrl+letter, a key name such as ENTER, or ']'")
    key_parser.add_argument("--session", help="Session ID (default: active session)")
    _add_common_args(key_parser)

    write_parser = subparsers.add_parser("write", help="Write a command line to a session")
    write_parser.add_argument("text", help="Command text to write")
    write_parser.add_argument("--session", required=True, help="Session ID")
    _add_common_args(write_parser)

    window_parser = subparsers.add_parser("create-window", help="Create a new window")
    window_parser.add_argument("--profile", help="Profile name (default profile if omitted)")

    tab_parser = subparsers.add_parser("create-tab", help="Create a new tab")
    tab_parser.add_argument("--window-id", type=int, help="Window ID (default: current window)")
    tab_parser.add_argument("--profile", help="Profile name (default profile if omitted)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for iterm-mcp."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ItermMcpError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _setup_logging(args, config)
    bridge = ItermBridge.from_config(config)

    handler = COMMANDS.get(args.command)
    if handler is None:
        from iterm_mcp.server import run_server

        run_server(bridge)
        return 0

    try:
        return _run_async(handler(bridge, args))
    except (ItermMcpError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
