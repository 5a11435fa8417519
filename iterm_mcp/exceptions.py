"""Custom exception hierarchy for iterm-mcp.

Every bridge operation either returns a fully decoded result or raises one
of the errors below. Errors raised from a failed osascript invocation wrap
the underlying ScriptExecutionError as their cause so the original stderr
text is never lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable


class ItermMcpError(Exception):
    """Base exception for all iterm-mcp errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Script Execution Errors
# =============================================================================


class ScriptExecutionError(ItermMcpError):
    """Raised when an osascript subprocess exits non-zero or cannot start."""

    def __init__(
        self,
        message: str = "AppleScript execution failed",
        *,
        exit_code: int | None = None,
        stderr: str = "",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Session Errors
# =============================================================================


class SessionError(ItermMcpError):
    """Base class for session-related errors."""

    pass


class SessionListError(SessionError):
    """Raised when enumerating iTerm2 sessions fails."""

    def __init__(
        self,
        message: str = "Failed to list sessions",
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)


class SessionNotFoundError(SessionError):
    """Raised when a session id does not match any live session."""

    def __init__(
        self,
        session_id: str,
        *,
        available_ids: Iterable[str] | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.session_id = session_id
        self.available_ids = list(available_ids) if available_ids is not None else None
        message = f"Session not found: {session_id}"
        if self.available_ids is not None:
            message += f". Available sessions: {', '.join(self.available_ids)}"
        super().__init__(message, context=context, cause=cause)


class OutputReadError(SessionError):
    """Raised when reading a session's buffer fails."""

    def __init__(
        self,
        message: str = "Failed to read terminal output",
        *,
        session_id: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if session_id:
            ctx["session_id"] = session_id
        super().__init__(message, context=ctx, cause=cause)


class CommandWriteError(SessionError):
    """Raised when writing a command to a session fails."""

    def __init__(
        self,
        message: str = "Failed to write command",
        *,
        session_id: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if session_id:
            ctx["session_id"] = session_id
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Control Key Errors
# =============================================================================


class ControlKeyError(ItermMcpError):
    """Base class for send-key errors."""

    pass


class InvalidKeyError(ControlKeyError):
    """Raised when a key name cannot be resolved to a character code."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f'Invalid key: "{key}". Use a single letter (A-Z) for control '
            "characters, a special key name (ENTER, RETURN, CR, LF, NEWLINE, "
            "ESC, ESCAPE, TAB, BACKSPACE, BS, DELETE, DEL, SPACE), or ']' "
            "for telnet escape"
        )


class KeySendError(ControlKeyError):
    """Raised when writing a control character to a session fails."""

    def __init__(
        self,
        message: str = "Failed to send key",
        *,
        session_id: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if session_id:
            ctx["session_id"] = session_id
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Window/Tab Creation Errors
# =============================================================================


class CreateError(ItermMcpError):
    """Base class for window and tab creation errors."""

    pass


class WindowCreateError(CreateError):
    """Raised when creating a window fails."""

    def __init__(
        self,
        message: str = "Failed to create window",
        *,
        profile: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if profile:
            ctx["profile"] = profile
        super().__init__(message, context=ctx, cause=cause)


class TabCreateError(CreateError):
    """Raised when creating a tab fails, including an unknown window id."""

    def __init__(
        self,
        message: str = "Failed to create tab",
        *,
        window_id: int | None = None,
        profile: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if window_id is not None:
            ctx["window_id"] = window_id
        if profile:
            ctx["profile"] = profile
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(ItermMcpError):
    """Base class for configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when configuration file fails to load."""

    def __init__(
        self,
        message: str = "Failed to load configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ConfigError):
    """Raised when configuration does not match the settings schema."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = str(value)
        super().__init__(message, context=ctx, cause=cause)


class ConfigSaveError(ConfigError):
    """Raised when configuration cannot be written."""

    def __init__(
        self,
        message: str = "Failed to save configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry for Categorization
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for monitoring."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 100

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)

    def reset(self) -> None:
        """Forget all recorded errors."""
        self.total_count = 0
        self.by_type.clear()
        self.recent_errors.clear()


# Global error stats tracker
error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)
