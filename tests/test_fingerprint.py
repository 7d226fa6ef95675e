"""Tests for error fingerprinting."""

from rootly_runtime.utils.fingerprint import (
    STACK_HEADER,
    fingerprint,
    recent_first_stack,
    stable_stack_frame,
)


def _raise_here(message):
    try:
        raise KeyError(message)
    except KeyError as e:
        return e


class BrokenStr(Exception):
    """Exception whose message cannot be rendered."""

    def __str__(self):
        raise RuntimeError("cannot render")


class TestStableStackFrame:
    """Tests for stable_stack_frame."""

    def test_skips_header_line(self):
        """Test that the first line is never used as the frame."""
        stack = "Error: boom\n    at handler (app.js:10:5)\n    at next (router.js:3:1)"
        assert stable_stack_frame(stack) == "at handler (app.js:10:5)"

    def test_skips_empty_lines(self):
        """Test that blank lines after the header are skipped."""
        stack = "header\n\n   \n  File \"a.py\", line 3, in f\n"
        assert stable_stack_frame(stack) == 'File "a.py", line 3, in f'

    def test_collapses_whitespace(self):
        """Test that internal whitespace runs become single spaces."""
        stack = "header\n   File   \"a.py\",\t line 3,   in f"
        assert stable_stack_frame(stack) == 'File "a.py", line 3, in f'

    def test_header_only(self):
        """Test stack with no frame lines."""
        assert stable_stack_frame("header only") == ""
        assert stable_stack_frame("") == ""

    def test_invalid_input_returns_empty(self):
        """Test that malformed input degrades to empty string."""
        assert stable_stack_frame(None) == ""  # type: ignore[arg-type]


class TestFingerprint:
    """Tests for fingerprint."""

    def test_same_shape_same_fingerprint(self, make_error):
        """Test that errors with equal message and raise site collapse."""
        first = make_error("boom")
        second = make_error("boom")

        assert first is not second
        assert fingerprint(first) == fingerprint(second)

    def test_different_message_different_fingerprint(self, make_error):
        """Test that the message is part of the fingerprint."""
        assert fingerprint(make_error("boom")) != fingerprint(make_error("bang"))

    def test_different_raise_site_different_fingerprint(self, make_error):
        """Test that the raise site is part of the fingerprint."""
        assert fingerprint(make_error("boom", KeyError)) != fingerprint(_raise_here("boom"))

    def test_frame_is_raise_site(self):
        """Test that the innermost frame is used."""
        error = _raise_here("missing")

        result = fingerprint(error)

        assert result.startswith("'missing':File ")
        assert "in _raise_here" in result

    def test_stackless_errors_collapse(self):
        """Test that errors without a traceback use an empty frame."""
        assert fingerprint(ValueError("boom")) == "boom:"
        assert fingerprint(ValueError("boom")) == fingerprint(RuntimeError("boom"))

    def test_empty_message_defaults(self):
        """Test that an empty message is replaced."""
        assert fingerprint(ValueError()) == "Unknown:"

    def test_never_raises(self):
        """Test that internal failures degrade to the sentinel."""
        assert fingerprint(BrokenStr()) == "unknown"


class TestRecentFirstStack:
    """Tests for recent_first_stack."""

    def test_no_traceback(self):
        """Test error that was never raised."""
        assert recent_first_stack(ValueError("x")) == ""

    def test_innermost_frame_first(self):
        """Test that frames are rendered most recent call first."""

        def outer():
            return inner()

        def inner():
            raise ValueError("deep")

        try:
            outer()
        except ValueError as e:
            error = e

        lines = recent_first_stack(error).splitlines()

        assert lines[0] == STACK_HEADER
        assert "in inner" in lines[1]
        assert any("in outer" in line for line in lines[2:])
