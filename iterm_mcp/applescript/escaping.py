"""Quoting helpers for the two nested contexts a generated script lives in.

A caller-supplied value is first placed inside an AppleScript string
literal, and the whole script is then passed to the shell as one
single-quoted ``osascript -e`` argument. Any caller-supplied value must go
through quote_script_literal (or escape_for_script_literal) before it is
interpolated into a script.
"""

from __future__ import annotations

import shlex

OSASCRIPT = "osascript"


def escape_for_script_literal(value: str) -> str:
    """Escape a string for use inside a double-quoted AppleScript literal.

    Backslashes are doubled before quotes are escaped so that the
    backslash introduced for a quote is not doubled again.
    """
    return value.replace("\\", "\\\\").replace('"', '\\"')


def quote_script_literal(value: str) -> str:
    """Quote ``value`` as an AppleScript string expression on a single line.

    Line breaks are spliced in with the ``return`` and ``linefeed``
    constants, so re-indenting the surrounding script never reaches the
    value's own text.
    """
    literal = f'"{escape_for_script_literal(value)}"'
    if "\n" not in value and "\r" not in value:
        return literal
    literal = literal.replace("\r", '" & return & "').replace("\n", '" & linefeed & "')
    return f"({literal})"


def escape_for_shell_single_quote(value: str) -> str:
    """Escape a string for use inside a single-quoted shell argument.

    Each single quote closes the quoted segment, emits an escaped quote,
    and reopens quoting.
    """
    return value.replace("'", "'\\''")


def build_shell_command(script: str, osascript: str = OSASCRIPT) -> str:
    """Build the shell command line that runs ``script`` through osascript."""
    return f"{shlex.quote(osascript)} -e '{escape_for_shell_single_quote(script)}'"
