"""Creating iTerm2 windows and tabs."""

from __future__ import annotations

import logging

from .applescript.codec import PAIR_SEP, decode_pair
from .applescript.escaping import quote_script_literal
from .applescript.runner import ScriptRunner
from .applescript.targeting import APPLICATION, WINDOW_NOT_FOUND, tell_application
from .exceptions import (
    ScriptExecutionError,
    TabCreateError,
    WindowCreateError,
    record_error,
)
from .models import CreateResult

logger = logging.getLogger(__name__)


def profile_clause(profile: str | None) -> str:
    """The ``with ... profile`` clause of a create command."""
    if profile:
        return f"with profile {quote_script_literal(profile)}"
    return "with default profile"


def build_window_script(profile: str | None = None, application: str = APPLICATION) -> str:
    """Script creating a window and returning its session and window ids."""
    return tell_application(
        f"""
        set newWindow to (create window {profile_clause(profile)})
        set newSession to current session of current tab of newWindow
        set sessionId to unique id of newSession
        set windowId to id of newWindow
        return sessionId & "{PAIR_SEP}" & windowId
        """,
        application,
    )


def build_tab_script(
    window_id: int | None = None,
    profile: str | None = None,
    application: str = APPLICATION,
) -> str:
    """Script creating a tab and returning session id, window id and tab index."""
    if window_id is not None:
        window_id = int(window_id)
        body = f"""
        set targetWindow to missing value
        repeat with w in windows
          if id of w is {window_id} then
            set targetWindow to w
            exit repeat
          end if
        end repeat

        if targetWindow is missing value then
          error "{WINDOW_NOT_FOUND} with ID: {window_id}"
        end if

        tell targetWindow
          set newTab to (create tab {profile_clause(profile)})
          set newSession to current session of newTab
          set sessionId to unique id of newSession
          set tabIdx to 0
          repeat with i from 1 to count of tabs
            if item i of tabs is newTab then
              set tabIdx to i - 1
              exit repeat
            end if
          end repeat
          return sessionId & "{PAIR_SEP}" & {window_id} & "{PAIR_SEP}" & tabIdx
        end tell
        """
    else:
        body = f"""
        tell current window
          set newTab to (create tab {profile_clause(profile)})
          set newSession to current session of newTab
          set sessionId to unique id of newSession
          set windowId to id of current window
          set tabIdx to 0
          repeat with i from 1 to count of tabs
            if item i of tabs is newTab then
              set tabIdx to i - 1
              exit repeat
            end if
          end repeat
          return sessionId & "{PAIR_SEP}" & windowId & "{PAIR_SEP}" & tabIdx
        end tell
        """
    return tell_application(body, application)


class WindowTabManager:
    """Creates windows and tabs, optionally with a named profile."""

    def __init__(self, runner: ScriptRunner, application: str = APPLICATION) -> None:
        self.runner = runner
        self.application = application

    async def create_window(self, profile: str | None = None) -> CreateResult:
        """Create a new window.

        Args:
            profile: iTerm2 profile name; the default profile when omitted.

        Returns:
            CreateResult with the new session id and window id.

        Raises:
            WindowCreateError: If the script fails or its output is malformed.
        """
        try:
            script = build_window_script(profile, self.application)
            result = await self.runner.run(self.runner.build_command(script))
            session_id, window_id = decode_pair(result.stdout, 2)
            created = CreateResult(session_id=session_id, window_id=int(window_id))
        except (ScriptExecutionError, ValueError) as e:
            record_error(e)
            detail = e.message if isinstance(e, ScriptExecutionError) else str(e)
            raise WindowCreateError(
                f"Failed to create window: {detail}", profile=profile, cause=e
            ) from e

        logger.info("Created window %s (session %s)", created.window_id, created.session_id)
        return created

    async def create_tab(
        self, window_id: int | None = None, profile: str | None = None
    ) -> CreateResult:
        """Create a new tab in the given window, or in the current window.

        Returns:
            CreateResult with session id, window id and zero-based tab index.

        Raises:
            TabCreateError: If the window does not exist, the script fails,
                or its output is malformed.
        """
        try:
            script = build_tab_script(window_id, profile, self.application)
            result = await self.runner.run(self.runner.build_command(script))
            session_id, new_window_id, tab_index = decode_pair(result.stdout, 3)
            created = CreateResult(
                session_id=session_id,
                window_id=int(new_window_id),
                tab_index=int(tab_index),
            )
        except (ScriptExecutionError, ValueError) as e:
            record_error(e)
            detail = e.message if isinstance(e, ScriptExecutionError) else str(e)
            raise TabCreateError(
                f"Failed to create tab: {detail}",
                window_id=window_id,
                profile=profile,
                cause=e,
            ) from e

        logger.info(
            "Created tab %s in window %s (session %s)",
            created.tab_index,
            created.window_id,
            created.session_id,
        )
        return created
