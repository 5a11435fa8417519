"""Sending control characters and special keys to iTerm2 sessions."""

from __future__ import annotations

import logging

from .applescript.runner import ScriptRunner
from .applescript.targeting import APPLICATION, session_script
from .exceptions import (
    KeySendError,
    ScriptExecutionError,
    record_error,
)
from .keys import describe_key, resolve_key
from .models import KeyDescriptor

logger = logging.getLogger(__name__)


def build_control_script(
    code: int,
    session_id: str | None = None,
    application: str = APPLICATION,
) -> str:
    """Script writing one character by code, without a trailing newline."""
    return session_script(
        f"write text (ASCII character {int(code)}) newline NO",
        session_id,
        application,
    )


class ControlSender:
    """Writes single control characters into a session."""

    def __init__(self, runner: ScriptRunner, application: str = APPLICATION) -> None:
        self.runner = runner
        self.application = application

    async def send(self, key: str, session_id: str | None = None) -> KeyDescriptor:
        """Send ``key`` to a session, or to the foreground session.

        Args:
            key: Special key name, ']' or a letter A-Z for Ctrl+letter.
            session_id: Target session's unique id.

        Returns:
            The code that was written and its label.

        Raises:
            InvalidKeyError: If ``key`` is not recognized.
            KeySendError: If the script fails, including when no session
                has ``session_id``.
        """
        descriptor = describe_key(resolve_key(key))
        script = build_control_script(descriptor.code, session_id, self.application)
        logger.debug(
            "Sending %s (code %d) to %s",
            descriptor.label,
            descriptor.code,
            session_id or "front session",
        )

        try:
            await self.runner.run(self.runner.build_command(script))
        except ScriptExecutionError as e:
            record_error(e)
            raise KeySendError(
                f"Failed to send key: {e.message}",
                session_id=session_id,
                cause=e,
            ) from e

        return descriptor
