"""
Cleanup of raw model output before it is returned to the caller
"""
from typing import Optional

NO_RESPONSE_MESSAGE = "No response received."

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"


def strip_reasoning(text: str, open_marker: str = THINK_OPEN, close_marker: str = THINK_CLOSE) -> str:
    """
    Remove every `<think>...</think>` region.

    Scans left to right; a region runs from an open marker to the first
    close marker after it. An open marker with no close after it is left
    in place together with everything that follows. A close marker with
    no open before it is kept as text.
    """
    parts = []
    pos = 0
    while True:
        start = text.find(open_marker, pos)
        if start == -1:
            break
        end = text.find(close_marker, start + len(open_marker))
        if end == -1:
            break
        parts.append(text[pos:start])
        pos = end + len(close_marker)
    parts.append(text[pos:])
    return "".join(parts)


def sanitize(raw: Optional[str]) -> str:
    """Strip reasoning regions and surrounding whitespace from a model reply"""
    if not raw:
        return NO_RESPONSE_MESSAGE
    return strip_reasoning(raw).strip()
