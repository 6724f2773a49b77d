import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from helpers import FakeWeb  # noqa: E402


@pytest.fixture(autouse=True)
def keep_signal_handlers(monkeypatch):
    """Leave pytest's own SIGTERM/SIGHUP handling alone."""
    monkeypatch.setattr("esoaddons.cli.handle_termination_signals", lambda: None)


@pytest.fixture
def fake_web(monkeypatch):
    web = FakeWeb()
    monkeypatch.setattr("requests.get", web.get)
    return web
