"""Tests for debug logging."""

from rootly_runtime.core.logger import is_debug_mode, set_debug_mode
from rootly_runtime.services.capture import CaptureOrchestrator


class TestDebugMode:
    """Tests for set_debug_mode."""

    def test_disabled_by_default(self):
        """Test that debug mode starts off."""
        assert is_debug_mode() is False

    def test_debug_lines_emitted(self, recording_transport, clock, make_error):
        """Test that pipeline decisions are logged in debug mode."""
        messages = []
        set_debug_mode(True, sink=messages.append)
        orchestrator = CaptureOrchestrator(recording_transport, clock=clock)
        error = make_error("boom")

        orchestrator.capture(error, "key", "preview", "http://example.test")
        orchestrator.capture(error, "key", "preview", "http://example.test")

        assert is_debug_mode() is True
        assert any(m.startswith("[Rootly SDK] Sending: boom (error)") for m in messages)
        assert any(m.startswith("[Rootly SDK] Recursive capture prevented") for m in messages)

    def test_silent_when_disabled(self, recording_transport, clock, make_error):
        """Test that nothing is logged after debug mode is turned off."""
        messages = []
        set_debug_mode(True, sink=messages.append)
        set_debug_mode(False)
        orchestrator = CaptureOrchestrator(recording_transport, clock=clock)

        orchestrator.capture(make_error("boom"), "key", "preview", "http://example.test")

        assert is_debug_mode() is False
        assert messages == []
