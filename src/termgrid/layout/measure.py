"""Display-width measurement for terminal text."""
from __future__ import annotations

import re
from typing import Callable

from rich.cells import cell_len

ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

MeasureFn = Callable[[str], int]

_LINE_BREAK_RE = re.compile(r"\r\n|[\r\n\v\f\x85\u2028\u2029]")
# C0/C1 controls other than ESC, which starts the SGR sequences we keep.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0e-\x1a\x1c-\x1f\x7f-\x84\x86-\x9f]")
TAB_SIZE = 4


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""

    return ANSI_ESCAPE_RE.sub("", text)


def single_line(text: str) -> str:
    """
    Flatten *text* onto one terminal line.

    Line breaks become single spaces, tabs expand to the next multiple of
    ``TAB_SIZE`` and other control characters are dropped, so that what
    is measured is exactly what occupies the cell.
    """
    if not text:
        return text
    flattened = _LINE_BREAK_RE.sub(" ", text)
    if "\t" in flattened:
        flattened = flattened.expandtabs(TAB_SIZE)
    return _CONTROL_RE.sub("", flattened)


def display_width(text: str) -> int:
    """
    Return the number of terminal cells *text* occupies.

    ANSI escape sequences are ignored. Wide East Asian characters and most
    emoji count as two cells and combining marks as zero, using Rich's cell
    tables so the result agrees with what Rich itself would print.
    """
    if not text:
        return 0
    return cell_len(strip_ansi(text))


__all__ = ["ANSI_ESCAPE_RE", "MeasureFn", "TAB_SIZE", "display_width", "single_line", "strip_ansi"]
