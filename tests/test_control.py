"""Tests for ControlSender."""

import pytest

from iterm_mcp.control import ControlSender, build_control_script
from iterm_mcp.exceptions import InvalidKeyError, KeySendError
from iterm_mcp.testing import MockScriptRunner


class TestControlSender:
    """Tests for sending control characters."""

    @pytest.fixture
    def runner(self) -> MockScriptRunner:
        return MockScriptRunner()

    @pytest.fixture
    def sender(self, runner: MockScriptRunner) -> ControlSender:
        return ControlSender(runner)

    @pytest.mark.asyncio
    async def test_ctrl_c(self, sender: ControlSender, runner: MockScriptRunner):
        """C is sent as ASCII 3."""
        descriptor = await sender.send("C")
        assert descriptor.code == 3
        assert descriptor.label == "Control-C"
        assert "ASCII character 3)" in runner.last_script

    @pytest.mark.asyncio
    async def test_lowercase_letter(self, sender: ControlSender, runner: MockScriptRunner):
        await sender.send("c")
        assert "ASCII character 3)" in runner.last_script

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "key,code",
        [("]", 29), ("ESC", 27), ("escape", 27), ("ENTER", 13), ("return", 13),
         ("TAB", 9), ("BACKSPACE", 127), ("delete", 127)],
    )
    async def test_special_keys(self, sender: ControlSender, runner: MockScriptRunner, key, code):
        await sender.send(key)
        assert f"ASCII character {code})" in runner.last_script

    @pytest.mark.asyncio
    async def test_no_trailing_newline(self, sender: ControlSender, runner: MockScriptRunner):
        """The write uses newline NO so only one character is sent."""
        await sender.send("ENTER")
        assert "newline NO" in runner.last_script

    @pytest.mark.asyncio
    async def test_foreground_session_by_default(
        self, sender: ControlSender, runner: MockScriptRunner
    ):
        await sender.send("C")
        assert "tell front window" in runner.last_script
        assert "unique id" not in runner.last_script

    @pytest.mark.asyncio
    async def test_targets_session_by_id(self, sender: ControlSender, runner: MockScriptRunner):
        await sender.send("C", session_id="w0t1p0:ABC")
        script = runner.last_script
        assert 'if unique id of s is "w0t1p0:ABC" then' in script
        assert 'error "Session not found: w0t1p0:ABC"' in script

    @pytest.mark.asyncio
    async def test_session_id_is_escaped(self, sender: ControlSender, runner: MockScriptRunner):
        """Quotes in a session id cannot close the script literal."""
        await sender.send("C", session_id='x" & quit & "')
        assert 'unique id of s is "x\\" & quit & \\""' in runner.last_script

    @pytest.mark.asyncio
    async def test_invalid_key_runs_nothing(self, sender: ControlSender, runner: MockScriptRunner):
        """Invalid keys are rejected before any script is built or run."""
        with pytest.raises(InvalidKeyError):
            await sender.send("123")
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_execution_failure(self, sender: ControlSender, runner: MockScriptRunner):
        runner.queue_error("Command execution failed")
        with pytest.raises(KeySendError) as exc_info:
            await sender.send("C")
        assert "Failed to send key" in str(exc_info.value)
        assert "Command execution failed" in str(exc_info.value)
        assert len(runner.calls) == 1

    @pytest.mark.asyncio
    async def test_missing_session_surfaces_host_text(
        self, sender: ControlSender, runner: MockScriptRunner
    ):
        runner.queue_error("execution error: iTerm got an error: Session not found: gone (-2700)")
        with pytest.raises(KeySendError) as exc_info:
            await sender.send("C", session_id="gone")
        assert "Session not found: gone" in str(exc_info.value)
        assert exc_info.value.context["session_id"] == "gone"


class TestBuildControlScript:
    def test_custom_application(self):
        script = build_control_script(3, application="iTerm")
        assert script.startswith('tell application "iTerm"')
        assert script.rstrip().endswith("end tell")
