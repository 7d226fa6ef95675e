"""Pytest configuration and common fixtures."""

import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple, Type

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from rootly_runtime.core.context import RuntimeContext, set_runtime_context
from rootly_runtime.core.logger import set_debug_mode
from rootly_runtime.models.payload import ErrorPayload
from rootly_runtime.services.transport import SETTLED, Transport

TEST_API_KEY = "rk_test_0123456789"
TEST_COLLECTOR_URL = "http://example.test"


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingTransport(Transport):
    """Transport that records payloads instead of sending them."""

    def __init__(self):
        super().__init__()
        self.sent: List[Tuple[ErrorPayload, str, str]] = []

    def send(self, payload: ErrorPayload, api_key: str, collector_url: str) -> Any:
        self.sent.append((payload, api_key, collector_url))
        return SETTLED

    @property
    def payloads(self) -> List[ErrorPayload]:
        return [payload for payload, _, _ in self.sent]


@pytest.fixture
def clock():
    """Fake millisecond clock."""
    return FakeClock()


@pytest.fixture
def recording_transport():
    """Transport recording payloads."""
    return RecordingTransport()


@pytest.fixture(autouse=True)
def isolated_context(recording_transport, clock, monkeypatch):
    """Install a fresh, uninitialized runtime context for every test."""
    monkeypatch.delenv("ROOTLY_API_URL", raising=False)
    monkeypatch.delenv("ROOTLY_ENVIRONMENT", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    # Hooks installed by init() must not leak between tests
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    context = RuntimeContext(transport=recording_transport, clock=clock)
    previous = set_runtime_context(context)
    yield context
    set_runtime_context(previous)
    set_debug_mode(False)


@pytest.fixture
def runtime_context(isolated_context):
    """Initialized runtime context with a recording transport."""
    isolated_context.configure(TEST_API_KEY, "production", TEST_COLLECTOR_URL)
    return isolated_context


@pytest.fixture
def make_error() -> Callable[..., BaseException]:
    """Factory raising and catching an exception so it carries a traceback.

    Every error is raised from the same line, so equal messages give equal
    fingerprints.
    """

    def _make(message: str = "boom", error_type: Type[BaseException] = ValueError):
        try:
            raise error_type(message)
        except BaseException as e:
            return e

    return _make
