"""Subprocess execution of generated AppleScripts.

Components depend on the ScriptRunner protocol rather than on a concrete
runner, so tests can substitute iterm_mcp.testing.MockScriptRunner.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..exceptions import ScriptExecutionError
from .escaping import OSASCRIPT, build_shell_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptResult:
    """Captured output of one finished subprocess."""

    stdout: str
    stderr: str
    exit_code: int


@runtime_checkable
class ScriptRunner(Protocol):
    """Runs a shell command line and captures its output."""

    async def run(self, command_line: str) -> ScriptResult:
        """Run ``command_line`` to completion.

        Raises:
            ScriptExecutionError: On non-zero exit or signal termination.
        """
        ...

    def build_command(self, script: str) -> str:
        """Wrap an AppleScript into the command line ``run`` expects."""
        ...


class OsascriptRunner:
    """Runs AppleScripts through ``osascript -e`` in a shell subprocess.

    Each call is an independent subprocess; there is no timeout, retry,
    or caching. A hung osascript blocks its caller.
    """

    def __init__(self, osascript_path: str = OSASCRIPT) -> None:
        self.osascript_path = osascript_path

    def build_command(self, script: str) -> str:
        return build_shell_command(script, self.osascript_path)

    async def run(self, command_line: str) -> ScriptResult:
        try:
            proc = await asyncio.create_subprocess_shell(
                command_line,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await proc.communicate()
        except (OSError, ValueError) as e:
            # ValueError covers NUL bytes and unencodable text in the command line.
            raise ScriptExecutionError(
                f"Failed to start osascript: {e}", cause=e
            ) from e

        result = ScriptResult(
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
            exit_code=proc.returncode if proc.returncode is not None else -1,
        )

        if result.exit_code != 0:
            if result.exit_code < 0:
                detail = f"osascript terminated by signal {-result.exit_code}"
            else:
                detail = f"osascript exited with code {result.exit_code}"
            error_text = "\n".join(
                part for part in (result.stderr.strip(), result.stdout.strip()) if part
            )
            message = f"{detail}: {error_text}" if error_text else detail
            logger.debug("Script failed: %s", message)
            raise ScriptExecutionError(
                message,
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

        return result
