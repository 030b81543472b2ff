"""Measuring and fitting menu text into a fixed number of terminal cells."""

from __future__ import annotations

from wcwidth import wcwidth

ELLIPSIS = "..."


def _char_width(char: str) -> int:
    """Cells taken by *char*; control characters take none."""
    return max(wcwidth(char), 0)


def text_width(text: str) -> int:
    """Return the number of cells *text* occupies."""
    return sum(_char_width(char) for char in text)


def clamp_width(text: str, limit: int) -> int:
    """Return the width of *text*, but never more than *limit*.

    Measuring stops as soon as the limit is passed, so long texts are cheap.
    """
    if limit <= 0:
        return 0
    used = 0
    for char in text:
        used += _char_width(char)
        if used > limit:
            return limit
    return used


def fit_text(text: str, width: int) -> str:
    """Return *text* cut to fit in *width* cells.

    Text that is too long is cut where an ellipsis still fits, and the
    ellipsis is appended. When not even the ellipsis fits, nothing is shown.
    """
    if width <= 0:
        return ""
    ellipsis_width = text_width(ELLIPSIS)
    used = 0
    cut = None
    for index, char in enumerate(text):
        if used + ellipsis_width <= width:
            cut = index
        char_width = _char_width(char)
        if used + char_width > width:
            if cut is None:
                return ""
            return text[:cut] + ELLIPSIS
        used += char_width
    return text