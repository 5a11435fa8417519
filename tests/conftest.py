"""Shared fixtures."""

import pytest

from iterm_mcp.api import ItermBridge
from iterm_mcp.models import BridgeSettings, SessionRecord
from iterm_mcp.testing import MockScriptRunner


@pytest.fixture
def mock_runner() -> MockScriptRunner:
    return MockScriptRunner()


@pytest.fixture
def bridge(mock_runner: MockScriptRunner) -> ItermBridge:
    return ItermBridge(runner=mock_runner, settings=BridgeSettings())


@pytest.fixture
def sample_sessions() -> list[SessionRecord]:
    return [
        SessionRecord(
            session_id="w0t0p0:1F2E",
            name="zsh",
            window_name="Main",
            window_id=4821,
            tab_index=0,
            tty="/dev/ttys001",
            profile="Default",
            is_current=True,
            is_processing=False,
            preview="$ make test\nok",
        ),
        SessionRecord(
            session_id="w0t1p0:9A8B",
            name="vim",
            window_name="Main",
            window_id=4821,
            tab_index=1,
            tty="/dev/ttys002",
            profile="Dev",
            is_current=False,
            is_processing=True,
            preview="",
        ),
    ]
