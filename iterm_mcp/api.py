"""Public API for programmatic access to iterm-mcp.

Wires the bridge components to one runner and one set of settings.

Usage:
    from iterm_mcp.api import ItermBridge

    async def main():
        bridge = ItermBridge.from_config()
        sessions = await bridge.list_sessions()
        await bridge.write_to_terminal("ls -la", sessions[0].session_id)
        print(await bridge.read_output(sessions[0].session_id, line_count=10))
"""

from __future__ import annotations

import logging
from pathlib import Path

from .applescript.runner import OsascriptRunner, ScriptRunner
from .command import CommandExecutor
from .config import load_config
from .control import ControlSender
from .models import (
    AppConfig,
    BridgeSettings,
    CommandResult,
    CreateResult,
    KeyDescriptor,
    SessionRecord,
)
from .output import OutputReader
from .sessions import SessionRegistry
from .windows import WindowTabManager

logger = logging.getLogger(__name__)


class ItermBridge:
    """Entry point to every bridge operation.

    Each call is one independent osascript round-trip against live iTerm2
    state; nothing is cached between calls.
    """

    def __init__(
        self,
        runner: ScriptRunner | None = None,
        settings: BridgeSettings | None = None,
    ) -> None:
        self.settings = settings or BridgeSettings()
        self.runner = runner or OsascriptRunner(self.settings.osascript_path)
        app = self.settings.application_name

        self.registry = SessionRegistry(
            self.runner,
            app,
            preview_chars=self.settings.preview_chars,
            preview_lines=self.settings.preview_lines,
        )
        self.reader = OutputReader(self.runner, app)
        self.sender = ControlSender(self.runner, app)
        self.executor = CommandExecutor(
            self.runner,
            app,
            settle_seconds=self.settings.command_settle_seconds,
            poll_interval=self.settings.poll_interval_ms / 1000,
            reader=self.reader,
        )
        self.windows = WindowTabManager(self.runner, app)

    @classmethod
    def from_config(
        cls,
        config: AppConfig | None = None,
        *,
        config_path: str | Path | None = None,
        runner: ScriptRunner | None = None,
    ) -> ItermBridge:
        """Build a bridge from a loaded (or freshly read) AppConfig."""
        if config is None:
            config = load_config(config_path)
        return cls(runner=runner, settings=config.settings)

    async def list_sessions(self) -> list[SessionRecord]:
        return await self.registry.list_sessions()

    async def get_session(self, session_id: str) -> SessionRecord:
        return await self.registry.get_session(session_id)

    async def write_to_terminal(
        self, command: str, session_id: str | None = None
    ) -> CommandResult:
        """Write a command line and report how many buffer lines followed it."""
        result = await self.executor.execute(command, session_id)
        logger.info(
            "Wrote command to %s, %d new lines",
            session_id or "front session",
            result.output_lines,
        )
        return result

    async def read_output(
        self, session_id: str | None = None, line_count: int | None = None
    ) -> str:
        """Read the last ``line_count`` lines (default from settings)."""
        if line_count is None:
            line_count = self.settings.default_read_lines
        return await self.reader.read(session_id, line_count)

    async def send_key(self, key: str, session_id: str | None = None) -> KeyDescriptor:
        return await self.sender.send(key, session_id)

    async def create_window(self, profile: str | None = None) -> CreateResult:
        return await self.windows.create_window(profile)

    async def create_tab(
        self, window_id: int | None = None, profile: str | None = None
    ) -> CreateResult:
        return await self.windows.create_tab(window_id, profile)
