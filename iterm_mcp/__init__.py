"""iTerm2 bridge for agents.

Discovers, addresses and controls iTerm2 sessions through iTerm2's
AppleScript interface, and exposes those operations as MCP tools.

Public API Usage:
    from iterm_mcp import ItermBridge

    async def main():
        bridge = ItermBridge.from_config()
        for session in await bridge.list_sessions():
            print(session.session_id, session.name)
        await bridge.send_key("C", session_id="...")
"""

__version__ = "0.2.0"

# =============================================================================
# Main API
# =============================================================================

from iterm_mcp.api import ItermBridge

# =============================================================================
# Components
# =============================================================================

from iterm_mcp.command import CommandExecutor
from iterm_mcp.control import ControlSender
from iterm_mcp.keys import SPECIAL_KEYS, describe_key, resolve_key
from iterm_mcp.output import OutputReader
from iterm_mcp.sessions import SessionRegistry
from iterm_mcp.windows import WindowTabManager

# =============================================================================
# Data Models
# =============================================================================

from iterm_mcp.models import (
    AppConfig,
    BridgeSettings,
    CommandResult,
    ControlLetter,
    CreateResult,
    KeyDescriptor,
    SessionRecord,
    SpecialKey,
)

# =============================================================================
# Errors
# =============================================================================

from iterm_mcp.exceptions import (
    CommandWriteError,
    InvalidKeyError,
    ItermMcpError,
    KeySendError,
    OutputReadError,
    ScriptExecutionError,
    SessionListError,
    SessionNotFoundError,
    TabCreateError,
    WindowCreateError,
)

# =============================================================================
# Configuration
# =============================================================================

from iterm_mcp.config import load_config, save_config

__all__ = [
    "__version__",
    # Main API
    "ItermBridge",
    # Components
    "CommandExecutor",
    "ControlSender",
    "OutputReader",
    "SessionRegistry",
    "WindowTabManager",
    "SPECIAL_KEYS",
    "describe_key",
    "resolve_key",
    # Models
    "AppConfig",
    "BridgeSettings",
    "CommandResult",
    "ControlLetter",
    "CreateResult",
    "KeyDescriptor",
    "SessionRecord",
    "SpecialKey",
    # Errors
    "CommandWriteError",
    "InvalidKeyError",
    "ItermMcpError",
    "KeySendError",
    "OutputReadError",
    "ScriptExecutionError",
    "SessionListError",
    "SessionNotFoundError",
    "TabCreateError",
    "WindowCreateError",
    # Configuration
    "load_config",
    "save_config",
]
