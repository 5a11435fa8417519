"""MCP server exposing the bridge as agent tools (FastMCP).

Tool results are plain text: JSON for listings and creations, the raw
buffer for reads. Bridge errors are re-raised as ToolError so the agent
sees the original message.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .api import ItermBridge
from .exceptions import ItermMcpError
from .logging_config import log_exception
from .models import CommandResult, CreateResult, KeyDescriptor, SessionRecord

logger = logging.getLogger(__name__)

SERVER_NAME = "iterm-mcp"

SESSION_ID_REQUIRED = (
    "Error: session_id is required. Please call list_sessions first to get "
    "available session IDs."
)


# =============================================================================
# Response Formatting
# =============================================================================


def format_sessions(sessions: list[SessionRecord]) -> str:
    return json.dumps({"sessions": [s.to_dict() for s in sessions]}, indent=2)


def format_command_result(result: CommandResult) -> str:
    lines = result.output_lines
    return (
        f"{lines} lines were output after sending the command to the terminal "
        f"(session: {result.session_id}). Read the last {lines} lines of terminal "
        "contents to orient yourself. Never assume that the command was executed "
        "or that it was successful."
    )


def format_key_sent(descriptor: KeyDescriptor, session_id: str | None = None) -> str:
    session_info = f" (session: {session_id})" if session_id else ""
    return f"Sent key: {descriptor.label}{session_info}"


def format_created(result: CreateResult, message: str) -> str:
    data: dict[str, Any] = {"message": message}
    data.update(result.to_dict())
    return json.dumps(data, indent=2)


def _tool_error(exc: ItermMcpError, tool: str) -> ToolError:
    log_exception(
        logger,
        exc,
        f"Tool {tool} failed",
        level=logging.WARNING,
        include_traceback=False,
    )
    return ToolError(str(exc))


# =============================================================================
# Server
# =============================================================================


def create_server(bridge: ItermBridge | None = None) -> FastMCP:
    """Build the FastMCP server with every bridge tool registered."""
    bridge = bridge or ItermBridge.from_config()
    server = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Control iTerm2 terminal sessions. Call list_sessions first to "
            "discover session IDs, then target them with the other tools."
        ),
    )

    @server.tool
    async def list_sessions() -> str:
        """Lists all iTerm terminal sessions across all windows and tabs.

        Each session includes session_id, name, window, window_id, tab_index,
        tty, profile, is_current, is_processing and the last 5 lines of
        output as 'preview'. Always call this first before write_to_terminal
        to get a valid session_id.
        """
        try:
            return format_sessions(await bridge.list_sessions())
        except ItermMcpError as e:
            raise _tool_error(e, "list_sessions") from e

    @server.tool
    async def write_to_terminal(command: str, session_id: str | None = None) -> str:
        """Writes text to an iTerm terminal session, usually to run a command.

        session_id is required; get one from list_sessions.
        """
        if not session_id:
            raise ToolError(SESSION_ID_REQUIRED)
        try:
            return format_command_result(await bridge.write_to_terminal(command, session_id))
        except ItermMcpError as e:
            raise _tool_error(e, "write_to_terminal") from e

    @server.tool
    async def read_terminal_output(
        linesOfOutput: int | None = None, session_id: str | None = None
    ) -> str:
        """Reads output from an iTerm terminal session.

        Reads the last linesOfOutput lines (25 by default) from session_id,
        or from the currently active session when session_id is omitted.
        """
        try:
            return await bridge.read_output(session_id, linesOfOutput or None)
        except ItermMcpError as e:
            raise _tool_error(e, "read_terminal_output") from e

    @server.tool
    async def send_control_character(letter: str, session_id: str | None = None) -> str:
        """Sends a control character or special key to an iTerm terminal session.

        letter is a single letter A-Z for Ctrl+A through Ctrl+Z, a special key
        name (ENTER, RETURN, ESC, ESCAPE, TAB, BACKSPACE, DELETE, SPACE, CR,
        LF, NEWLINE, BS, DEL) or ']' for telnet escape. Sends to session_id,
        or to the currently active session when omitted.
        """
        try:
            descriptor = await bridge.send_key(letter, session_id)
        except ItermMcpError as e:
            raise _tool_error(e, "send_control_character") from e
        return format_key_sent(descriptor, session_id)

    @server.tool
    async def create_window(profile: str | None = None) -> str:
        """Creates a new iTerm2 window, optionally with a named profile.

        Returns the session ID of the new session for use with other tools.
        """
        try:
            return format_created(await bridge.create_window(profile), "Created new window")
        except ItermMcpError as e:
            raise _tool_error(e, "create_window") from e

    @server.tool
    async def create_tab(window_id: int | None = None, profile: str | None = None) -> str:
        """Creates a new tab in an iTerm2 window.

        Uses window_id from list_sessions, or the currently active window
        when omitted. Returns the new session ID, window ID and tab index.
        """
        try:
            return format_created(await bridge.create_tab(window_id, profile), "Created new tab")
        except ItermMcpError as e:
            raise _tool_error(e, "create_tab") from e

    return server


def run_server(bridge: ItermBridge | None = None) -> None:
    """Serve the bridge over stdio until the client disconnects."""
    logger.info("Starting %s server over stdio", SERVER_NAME)
    create_server(bridge).run()
