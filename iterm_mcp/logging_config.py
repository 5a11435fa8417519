"""Logging setup for the iterm_mcp package.

While serving MCP over stdio, stdout carries the protocol, so console
logging is written to stderr only. Persistent logs rotate under
~/.config/iterm-mcp/logs.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, TextIO

PACKAGE_LOGGER = "iterm_mcp"

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 3

LOG_DIR = Path.home() / ".config" / "iterm-mcp" / "logs"
LOG_FILE_NAME = "iterm-mcp.log"


def get_log_file_path() -> Path:
    """Path of the rotating log file; the directory is created on demand."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR / LOG_FILE_NAME


def _module_logger_name(module: str) -> str:
    if module == PACKAGE_LOGGER or module.startswith(f"{PACKAGE_LOGGER}."):
        return module
    return f"{PACKAGE_LOGGER}.{module}"


def setup_logging(
    *,
    level: int | str = DEFAULT_LOG_LEVEL,
    log_to_file: bool = True,
    log_to_console: bool = False,
    console_stream: TextIO = sys.stderr,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    debug_modules: Iterable[str] = (),
) -> None:
    """Replace the package logger's handlers.

    Args:
        level: Level name or number for the package logger and its handlers.
        log_to_file: Write to the rotating file under LOG_DIR.
        log_to_console: Write to ``console_stream``.
        console_stream: Console target; stdout is reserved for MCP.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.
        debug_modules: Modules (``control`` or ``iterm_mcp.control``) whose
            loggers are raised to DEBUG regardless of ``level``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LOG_LEVEL

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
    handlers: list[logging.Handler] = []
    if log_to_file:
        handlers.append(
            RotatingFileHandler(
                get_log_file_path(),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
    if log_to_console:
        handlers.append(logging.StreamHandler(console_stream))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    if not handlers:
        package_logger.addHandler(logging.NullHandler())

    for module in debug_modules:
        logging.getLogger(_module_logger_name(module)).setLevel(logging.DEBUG)


def log_exception(
    logger: logging.Logger,
    exc: Exception,
    message: str = "An error occurred",
    *,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log ``exc`` under ``message``, with or without its traceback."""
    if include_traceback:
        logger.log(level, "%s: %s", message, exc, exc_info=exc)
    else:
        logger.log(level, "%s: %s (%s)", message, exc, type(exc).__name__)
