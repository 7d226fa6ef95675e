"""Error fingerprinting for deduplication."""

import re
import traceback

from rootly_runtime.constants import DedupConfig, PayloadDefaults

_WHITESPACE = re.compile(r"\s+")

STACK_HEADER = "Traceback (most recent call first):"


def stable_stack_frame(stack: str) -> str:
    """
    Extract the first frame line of a stack text.

    The first line is the header and is skipped; the first non-empty line
    after it is returned with whitespace runs collapsed.

    Args:
        stack: Stack text, header line first

    Returns:
        Normalized frame line, or "" if there is none
    """
    try:
        for line in stack.split("\n")[1:]:
            trimmed = line.strip()
            if trimmed:
                return _WHITESPACE.sub(" ", trimmed)
        return ""
    except Exception:
        return ""


def recent_first_stack(error: BaseException) -> str:
    """Render the traceback of an error innermost frame first."""
    tb = error.__traceback__
    if tb is None:
        return ""
    frames = traceback.extract_tb(tb)
    frames.reverse()
    return STACK_HEADER + "\n" + "".join(traceback.format_list(frames))


def fingerprint(error: BaseException) -> str:
    """
    Compute a stable identity for an error's shape.

    Errors with the same message raised from the same line collapse to the
    same fingerprint regardless of object identity. Never raises.

    Args:
        error: Exception to fingerprint

    Returns:
        "<message>:<raise site frame>", or "unknown" on internal failure
    """
    try:
        message = str(error) or PayloadDefaults.FINGERPRINT_MESSAGE
        frame = stable_stack_frame(recent_first_stack(error))
        return f"{message}:{frame}"
    except Exception:
        return DedupConfig.UNKNOWN_FINGERPRINT
