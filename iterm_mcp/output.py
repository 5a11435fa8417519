"""Reading the text buffer of iTerm2 sessions."""

from __future__ import annotations

import logging

from .applescript.runner import ScriptRunner
from .applescript.targeting import APPLICATION, is_session_not_found, session_script
from .exceptions import (
    OutputReadError,
    ScriptExecutionError,
    SessionNotFoundError,
    record_error,
)

logger = logging.getLogger(__name__)


def build_buffer_script(session_id: str | None = None, application: str = APPLICATION) -> str:
    """Script returning the full contents of a session."""
    return session_script("return contents", session_id, application)


def tail_lines(text: str, line_count: int | None) -> str:
    """Return the last ``line_count`` lines of ``text``.

    ``None`` or 0 returns the whole text, as does a count larger than the
    number of lines.

    Raises:
        ValueError: If ``line_count`` is negative.
    """
    if not line_count:
        return text
    if line_count < 0:
        raise ValueError(f"line_count must not be negative, got {line_count}")
    return "\n".join(text.split("\n")[-line_count:])


class OutputReader:
    """Retrieves session buffers and trims them to the trailing lines."""

    def __init__(self, runner: ScriptRunner, application: str = APPLICATION) -> None:
        self.runner = runner
        self.application = application

    async def retrieve_buffer(self, session_id: str | None = None) -> str:
        """Return the whole buffer of a session, or of the foreground session.

        Only leading and trailing whitespace is removed.

        Raises:
            SessionNotFoundError: If no session has ``session_id``.
            OutputReadError: If the script fails for any other reason.
        """
        script = build_buffer_script(session_id, self.application)
        try:
            result = await self.runner.run(self.runner.build_command(script))
        except ScriptExecutionError as e:
            record_error(e)
            if session_id and is_session_not_found(e):
                raise SessionNotFoundError(session_id, cause=e) from e
            raise OutputReadError(
                f"Failed to read terminal output: {e.message}",
                session_id=session_id,
                cause=e,
            ) from e
        return result.stdout.strip()

    async def read(
        self, session_id: str | None = None, line_count: int | None = None
    ) -> str:
        """Return the trailing ``line_count`` lines of a session's buffer."""
        buffer = await self.retrieve_buffer(session_id)
        return tail_lines(buffer, line_count)
