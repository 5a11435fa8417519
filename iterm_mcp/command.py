"""Writing command text into iTerm2 sessions."""

from __future__ import annotations

import asyncio
import logging
import time

from .applescript.escaping import quote_script_literal
from .applescript.runner import ScriptRunner
from .applescript.targeting import APPLICATION, is_session_not_found, session_script
from .exceptions import (
    CommandWriteError,
    ScriptExecutionError,
    SessionNotFoundError,
    record_error,
)
from .models import CommandResult
from .output import OutputReader

logger = logging.getLogger(__name__)


def build_write_script(
    command: str,
    session_id: str | None = None,
    application: str = APPLICATION,
) -> str:
    """Script writing ``command`` followed by a return keystroke."""
    return session_script(
        f"write text {quote_script_literal(command)}",
        session_id,
        application,
    )


def build_processing_script(
    session_id: str | None = None, application: str = APPLICATION
) -> str:
    """Script returning the session's busy flag."""
    return session_script("return is processing", session_id, application)


class CommandExecutor:
    """Sends command lines to a session and reports how much output followed.

    When ``settle_seconds`` is positive, ``execute`` waits for the session's
    busy flag to clear (polling every ``poll_interval`` seconds) before it
    measures the buffer again.
    """

    def __init__(
        self,
        runner: ScriptRunner,
        application: str = APPLICATION,
        *,
        settle_seconds: float = 0.0,
        poll_interval: float = 0.2,
        reader: OutputReader | None = None,
    ) -> None:
        self.runner = runner
        self.application = application
        self.settle_seconds = settle_seconds
        self.poll_interval = poll_interval
        self.reader = reader or OutputReader(runner, application)

    async def write(self, command: str, session_id: str | None = None) -> None:
        """Write ``command`` and a return keystroke to the session.

        Raises:
            SessionNotFoundError: If no session has ``session_id``.
            CommandWriteError: If the script fails for any other reason.
        """
        script = build_write_script(command, session_id, self.application)
        logger.debug("Writing %d chars to %s", len(command), session_id or "front session")
        try:
            await self.runner.run(self.runner.build_command(script))
        except ScriptExecutionError as e:
            record_error(e)
            if session_id and is_session_not_found(e):
                raise SessionNotFoundError(session_id, cause=e) from e
            raise CommandWriteError(
                f"Failed to write command: {e.message}",
                session_id=session_id,
                cause=e,
            ) from e

    async def is_processing(self, session_id: str | None = None) -> bool:
        """Return iTerm2's busy flag for the session."""
        script = build_processing_script(session_id, self.application)
        try:
            result = await self.runner.run(self.runner.build_command(script))
        except ScriptExecutionError as e:
            record_error(e)
            if session_id and is_session_not_found(e):
                raise SessionNotFoundError(session_id, cause=e) from e
            raise CommandWriteError(
                f"Failed to query session state: {e.message}",
                session_id=session_id,
                cause=e,
            ) from e
        return result.stdout.strip().lower() == "true"

    async def wait_until_idle(self, session_id: str | None = None) -> bool:
        """Poll the busy flag until it clears or ``settle_seconds`` elapse.

        Returns:
            True if the session went idle, False if the wait ran out.
        """
        deadline = time.monotonic() + self.settle_seconds
        while time.monotonic() < deadline:
            if not await self.is_processing(session_id):
                return True
            await asyncio.sleep(self.poll_interval)
        logger.debug("Session %s still busy after %.1fs", session_id, self.settle_seconds)
        return False

    async def execute(self, command: str, session_id: str | None = None) -> CommandResult:
        """Write ``command`` and count the buffer lines it produced."""
        before = await self.reader.retrieve_buffer(session_id)
        await self.write(command, session_id)
        if self.settle_seconds > 0:
            await self.wait_until_idle(session_id)
        after = await self.reader.retrieve_buffer(session_id)
        return CommandResult(
            session_id=session_id,
            lines_before=len(before.split("\n")),
            lines_after=len(after.split("\n")),
        )
