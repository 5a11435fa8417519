"""AppleScript generation support: quoting, wire format and execution."""

from iterm_mcp.applescript.codec import (
    FIELD_SEP,
    PAIR_SEP,
    RECORD_SEP,
    decode_pair,
    decode_session_records,
    encode_pair,
    encode_session_records,
)
from iterm_mcp.applescript.escaping import (
    build_shell_command,
    escape_for_script_literal,
    escape_for_shell_single_quote,
    quote_script_literal,
)
from iterm_mcp.applescript.runner import OsascriptRunner, ScriptResult, ScriptRunner

__all__ = [
    "FIELD_SEP",
    "PAIR_SEP",
    "RECORD_SEP",
    "decode_pair",
    "decode_session_records",
    "encode_pair",
    "encode_session_records",
    "build_shell_command",
    "escape_for_script_literal",
    "escape_for_shell_single_quote",
    "quote_script_literal",
    "OsascriptRunner",
    "ScriptResult",
    "ScriptRunner",
]
