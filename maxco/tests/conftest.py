"""Shared fixtures for MAXCO tests."""

import os
import sys
import tempfile

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# Keep settings and logs out of the real user data directory
os.environ.setdefault("MAXCO_DATA_DIR", tempfile.mkdtemp(prefix="maxco-tests-"))

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from PyQt6.QtWidgets import QApplication

from maxco.src.domain.models.app_state import ApplicationState
from maxco.src.domain.services.command_router import CommandRouter


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeScheduler:
    """Collects delayed callbacks; tests fire them explicitly."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    @property
    def delays(self):
        return [delay for delay, _ in self.pending]

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def state():
    return ApplicationState()


@pytest.fixture
def router(qapp, state, clock, scheduler):
    return CommandRouter(state, clock=clock, scheduler=scheduler)


@pytest.fixture
def settings_dir(tmp_path):
    path = tmp_path / "configs"
    path.mkdir()
    return path
