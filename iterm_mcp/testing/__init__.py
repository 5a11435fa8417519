"""Testing utilities for iterm_mcp.

Provides a scripted runner so bridge components can be exercised
without iTerm2 or osascript.
"""

from iterm_mcp.testing.mock_terminal import MockScriptRunner, RecordedCall

__all__ = [
    "MockScriptRunner",
    "RecordedCall",
]
