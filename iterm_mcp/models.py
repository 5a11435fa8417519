"""Data models for iterm-mcp.

All records here are snapshots built from a single osascript round-trip.
They are never cached or mutated after construction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Union


# =============================================================================
# Configuration Models
# =============================================================================


@dataclass
class BridgeSettings:
    """Settings that shape the generated scripts and tool defaults."""

    osascript_path: str = "osascript"
    application_name: str = "iTerm2"
    preview_chars: int = 500
    preview_lines: int = 5
    default_read_lines: int = 25
    command_settle_seconds: float = 0.0
    poll_interval_ms: int = 200
    log_level: str = "INFO"


@dataclass
class AppConfig:
    """Complete application configuration."""

    settings: BridgeSettings = field(default_factory=BridgeSettings)


# =============================================================================
# Session Models
# =============================================================================


@dataclass(frozen=True)
class SessionRecord:
    """One discovered iTerm2 session."""

    session_id: str
    name: str
    window_name: str
    window_id: int
    tab_index: int  # zero-based
    tty: str
    profile: str
    is_current: bool
    is_processing: bool
    preview: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the key names agents see in tool output."""
        return {
            "session_id": self.session_id,
            "name": self.name,
            "window": self.window_name,
            "window_id": self.window_id,
            "tab_index": self.tab_index,
            "tty": self.tty,
            "profile": self.profile,
            "is_current": self.is_current,
            "is_processing": self.is_processing,
            "preview": self.preview,
        }


# =============================================================================
# Key Models
# =============================================================================


@dataclass(frozen=True)
class SpecialKey:
    """A named key from the special-key table, or the literal ']'."""

    name: str
    code: int


@dataclass(frozen=True)
class ControlLetter:
    """Ctrl+<letter>, sent as the letter's alphabet position."""

    letter: str
    code: int


ResolvedKey = Union[SpecialKey, ControlLetter]


@dataclass(frozen=True)
class KeyDescriptor:
    """What was actually sent: the character code and its display label."""

    code: int
    label: str


# =============================================================================
# Creation / Command Results
# =============================================================================


@dataclass(frozen=True)
class CreateResult:
    """Identifiers of a freshly created window or tab."""

    session_id: str
    window_id: int | None = None
    tab_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"session_id": self.session_id}
        if self.window_id is not None:
            data["window_id"] = self.window_id
        if self.tab_index is not None:
            data["tab_index"] = self.tab_index
        return data


@dataclass(frozen=True)
class CommandResult:
    """Buffer line counts observed around a written command."""

    session_id: str | None
    lines_before: int
    lines_after: int

    @property
    def output_lines(self) -> int:
        return self.lines_after - self.lines_before


# =============================================================================
# Serialization Helpers
# =============================================================================


def model_to_dict(obj: Any) -> dict[str, Any]:
    """Convert a dataclass model into a JSON-compatible dict."""
    return asdict(obj)
