"""Tests for OsascriptRunner subprocess handling."""

import shlex
from pathlib import Path

import pytest

from iterm_mcp.applescript.runner import OsascriptRunner, ScriptRunner
from iterm_mcp.exceptions import ScriptExecutionError
from iterm_mcp.testing import MockScriptRunner


class TestOsascriptRunner:
    """Run real shell commands in place of osascript."""

    @pytest.fixture
    def runner(self) -> OsascriptRunner:
        return OsascriptRunner()

    def test_satisfies_protocol(self, runner: OsascriptRunner):
        assert isinstance(runner, ScriptRunner)
        assert isinstance(MockScriptRunner(), ScriptRunner)

    def test_build_command(self):
        runner = OsascriptRunner("/usr/bin/osascript")
        assert shlex.split(runner.build_command("return \"it's\"")) == [
            "/usr/bin/osascript",
            "-e",
            "return \"it's\"",
        ]

    @pytest.mark.asyncio
    async def test_captures_stdout(self, runner: OsascriptRunner):
        result = await runner.run("printf 'a\\nb\\n'")
        assert result.stdout == "a\nb\n"
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, runner: OsascriptRunner):
        with pytest.raises(ScriptExecutionError) as exc_info:
            await runner.run("echo 'Session not found: x' >&2; exit 1")
        exc = exc_info.value
        assert exc.exit_code == 1
        assert "Session not found: x" in exc.message
        assert "Session not found: x" in exc.stderr

    @pytest.mark.asyncio
    async def test_signal_termination_raises(self, runner: OsascriptRunner):
        with pytest.raises(ScriptExecutionError) as exc_info:
            await runner.run("kill -TERM $$")
        assert exc_info.value.exit_code == -15
        assert "signal 15" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        runner = OsascriptRunner("/nonexistent/osascript")
        with pytest.raises(ScriptExecutionError) as exc_info:
            await runner.run(runner.build_command("return 1"))
        assert exc_info.value.exit_code == 127

    @pytest.mark.asyncio
    async def test_null_byte_raises_script_error(self, runner: OsascriptRunner):
        with pytest.raises(ScriptExecutionError) as exc_info:
            await runner.run(runner.build_command('write text "a\x00b"'))
        assert "Failed to start osascript" in exc_info.value.message
        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.asyncio
    async def test_script_argument_reaches_process_intact(self, tmp_path: Path):
        """A script with quotes arrives as one argument, unchanged.

        The stand-in executable lives under a directory with a space.
        """
        bin_dir = tmp_path / "fake bin"
        bin_dir.mkdir()
        fake = bin_dir / "osascript"
        fake.write_text("#!/bin/sh\nprintf '%s|' \"$@\"\n")
        fake.chmod(0o755)

        runner = OsascriptRunner(str(fake))
        script = 'tell application "iTerm2"\n  write text "it\'s"\nend tell'
        result = await runner.run(runner.build_command(script))
        assert result.stdout == f"-e|{script}|"
