"""Fit text to an exact display width by padding or truncating."""
from __future__ import annotations

from typing import Union

from ..datatypes import Align
from .measure import MeasureFn, display_width, strip_ansi

DEFAULT_ELLIPSIS = "…"


def coerce_align(value: Union[str, Align, None]) -> Align:
    """Return an :class:`Align` member for *value*; unknown names mean left."""

    if isinstance(value, Align):
        return value
    if value is None:
        return Align.LEFT
    try:
        return Align(str(value).strip().lower())
    except ValueError:
        return Align.LEFT


def truncate_text(
    text: str,
    width: int,
    *,
    measure: MeasureFn = display_width,
    ellipsis: str = DEFAULT_ELLIPSIS,
) -> str:
    """
    Shorten *text* so its display width does not exceed *width*.

    Text that already fits is returned unchanged, escape sequences included.
    Otherwise ANSI sequences are dropped and the longest prefix that leaves
    room for *ellipsis* is kept, followed by the ellipsis. The result may be
    narrower than *width* when a wide character straddles the cut.

    Returns:
        str: The possibly truncated text; ``""`` when *width* is not positive
        or cannot hold even the ellipsis.
    """
    if width <= 0:
        return ""
    if measure(text) <= width:
        return text
    ellipsis_width = measure(ellipsis)
    if ellipsis_width > width:
        return ""
    limit = width - ellipsis_width
    prefix = ""
    for char in strip_ansi(text):
        candidate = prefix + char
        if measure(candidate) > limit:
            break
        prefix = candidate
    return f"{prefix}{ellipsis}"


def align_text(
    text: str,
    width: int,
    align: Union[str, Align] = Align.LEFT,
    *,
    measure: MeasureFn = display_width,
    ellipsis: str = DEFAULT_ELLIPSIS,
) -> str:
    """
    Return *text* padded or truncated to exactly *width* terminal cells.

    Left alignment pads on the right, right alignment on the left, and center
    alignment puts the smaller half of an odd padding on the left. Truncated
    text is always left-aligned because it fills the cell.
    """
    if width <= 0:
        return ""
    text_width = measure(text)
    if text_width > width:
        truncated = truncate_text(text, width, measure=measure, ellipsis=ellipsis)
        return truncated + " " * max(0, width - measure(truncated))

    padding = width - text_width
    resolved = coerce_align(align)
    if resolved is Align.RIGHT:
        return " " * padding + text
    if resolved is Align.CENTER:
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


__all__ = ["DEFAULT_ELLIPSIS", "align_text", "coerce_align", "truncate_text"]
