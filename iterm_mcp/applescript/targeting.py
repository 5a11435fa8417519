"""Session targeting shared by every session-scoped script.

A script either scans all windows, tabs and sessions for a unique id or
addresses the current session of the front window.
"""

from __future__ import annotations

import textwrap

from .escaping import quote_script_literal

APPLICATION = "iTerm2"
SESSION_NOT_FOUND = "Session not found"
WINDOW_NOT_FOUND = "Window not found"


def tell_application(body: str, application: str = APPLICATION) -> str:
    """Wrap ``body`` in a tell block for the terminal application."""
    return (
        f"tell application {quote_script_literal(application)}\n"
        f"{textwrap.indent(textwrap.dedent(body).strip(), '  ')}\n"
        "end tell\n"
    )


def session_script(
    body: str,
    session_id: str | None = None,
    application: str = APPLICATION,
) -> str:
    """Build a script that runs ``body`` inside a tell block for one session.

    ``body`` must be script text only; caller-supplied values have to be
    quoted with quote_script_literal before they are put in it.
    When ``session_id`` is given and no session matches, the script raises
    a "Session not found" error naming the id.
    """
    body = textwrap.dedent(body).strip()
    if session_id:
        quoted_id = quote_script_literal(session_id)
        not_found = quote_script_literal(f"{SESSION_NOT_FOUND}: {session_id}")
        inner = (
            "repeat with w in windows\n"
            "  repeat with t in tabs of w\n"
            "    repeat with s in sessions of t\n"
            f"      if unique id of s is {quoted_id} then\n"
            "        tell s\n"
            f"{textwrap.indent(body, ' ' * 10)}\n"
            "        end tell\n"
            "        return\n"
            "      end if\n"
            "    end repeat\n"
            "  end repeat\n"
            "end repeat\n"
            f"error {not_found}"
        )
    else:
        inner = (
            "tell front window\n"
            "  tell current session of current tab\n"
            f"{textwrap.indent(body, ' ' * 4)}\n"
            "  end tell\n"
            "end tell"
        )
    return tell_application(inner, application)


def is_session_not_found(error: Exception) -> bool:
    """True when a script failure came from the session scan finding nothing."""
    return SESSION_NOT_FOUND in str(error)
