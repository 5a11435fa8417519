"""Discovery of iTerm2 sessions across all windows and tabs.

The listing script takes no caller-supplied values, so only the whole
script is shell-quoted; nothing inside it needs literal escaping.
"""

from __future__ import annotations

import logging

from .applescript.codec import (
    DEFAULT_PREVIEW_LINES,
    FIELD_SEP,
    RECORD_SEP,
    decode_session_records,
)
from .applescript.runner import ScriptRunner
from .applescript.targeting import APPLICATION, tell_application
from .exceptions import (
    ScriptExecutionError,
    SessionListError,
    SessionNotFoundError,
    record_error,
)
from .models import SessionRecord

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_CHARS = 500


def build_list_script(
    preview_chars: int = DEFAULT_PREVIEW_CHARS, application: str = APPLICATION
) -> str:
    """Script emitting one separator-delimited record per session."""
    preview_chars = max(int(preview_chars), 1)
    return tell_application(
        f"""
        set output to ""
        set currentSessionId to ""
        set fieldSep to "{FIELD_SEP}"
        set recordSep to "{RECORD_SEP}"

        try
          set currentSessionId to unique id of current session of current window
        end try

        set windowList to windows
        repeat with wIndex from 1 to count of windowList
          set w to item wIndex of windowList
          set windowId to id of w
          set windowName to name of w
          set tabList to tabs of w
          repeat with tIndex from 1 to count of tabList
            set t to item tIndex of tabList
            set sessionList to sessions of t
            repeat with sIndex from 1 to count of sessionList
              set s to item sIndex of sessionList
              set sessionId to unique id of s
              set sessionName to name of s
              set sessionTty to tty of s
              set profileName to profile name of s
              set isProc to is processing of s

              set sessionContents to contents of s
              set previewText to ""
              set contentLength to length of sessionContents
              if contentLength > {preview_chars} then
                set previewText to text (contentLength - {preview_chars - 1}) thru contentLength of sessionContents
              else if contentLength > 0 then
                set previewText to sessionContents
              end if

              set isCurr to (sessionId is equal to currentSessionId)

              set output to output & sessionId & fieldSep & sessionName & fieldSep & windowName & fieldSep & windowId & fieldSep & (tIndex - 1) & fieldSep & sessionTty & fieldSep & profileName & fieldSep & isCurr & fieldSep & isProc & fieldSep & previewText & recordSep
            end repeat
          end repeat
        end repeat

        return output
        """,
        application,
    )


class SessionRegistry:
    """Enumerates live sessions. Nothing is cached between calls."""

    def __init__(
        self,
        runner: ScriptRunner,
        application: str = APPLICATION,
        *,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
        preview_lines: int = DEFAULT_PREVIEW_LINES,
    ) -> None:
        self.runner = runner
        self.application = application
        self.preview_chars = preview_chars
        self.preview_lines = preview_lines

    async def list_sessions(self) -> list[SessionRecord]:
        """List every session in every tab of every window.

        Returns:
            Session records in window, tab, session order. Malformed
            records are left out.

        Raises:
            SessionListError: If the listing script fails.
        """
        script = build_list_script(self.preview_chars, self.application)
        try:
            result = await self.runner.run(self.runner.build_command(script))
        except ScriptExecutionError as e:
            record_error(e)
            raise SessionListError(f"Failed to list sessions: {e.message}", cause=e) from e

        sessions = decode_session_records(result.stdout, self.preview_lines)
        logger.debug("Discovered %d sessions", len(sessions))
        return sessions

    async def get_session(self, session_id: str) -> SessionRecord:
        """Find a live session by its unique id.

        Raises:
            SessionNotFoundError: With every currently known id when absent.
            SessionListError: If the listing script fails.
        """
        sessions = await self.list_sessions()
        for session in sessions:
            if session.session_id == session_id:
                return session
        raise SessionNotFoundError(
            session_id, available_ids=[s.session_id for s in sessions]
        )
