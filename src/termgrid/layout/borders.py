"""Border glyph palettes used by the grid renderer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Union

from ..datatypes import BorderStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BorderPalette:
    """Line-drawing glyphs for corners, junctions and runs."""

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    left_t: str
    right_t: str
    top_t: str
    bottom_t: str
    cross: str


_HEAVY = BorderPalette("┏", "┓", "┗", "┛", "━", "┃", "┣", "┫", "┳", "┻", "╋")

BORDER_PALETTES: Dict[BorderStyle, BorderPalette] = {
    BorderStyle.SINGLE: BorderPalette("┌", "┐", "└", "┘", "─", "│", "├", "┤", "┬", "┴", "┼"),
    BorderStyle.DOUBLE: BorderPalette("╔", "╗", "╚", "╝", "═", "║", "╠", "╣", "╦", "╩", "╬"),
    BorderStyle.ROUNDED: BorderPalette("╭", "╮", "╰", "╯", "─", "│", "├", "┤", "┬", "┴", "┼"),
    BorderStyle.BOLD: _HEAVY,
    BorderStyle.HEAVY: _HEAVY,
    BorderStyle.ASCII: BorderPalette("+", "+", "+", "+", "-", "|", "+", "+", "+", "+", "+"),
    BorderStyle.NONE: BorderPalette(*(" " * 11)),
}


def coerce_border_style(value: Union[str, BorderStyle, None]) -> BorderStyle:
    """
    Normalise a border style name to a :class:`BorderStyle` member.

    Raises:
        ValueError: If *value* does not name a known palette.
    """
    if value is None:
        return BorderStyle.SINGLE
    if isinstance(value, BorderStyle):
        return value
    normalized = str(value).strip().lower()
    try:
        return BorderStyle(normalized)
    except ValueError:
        choices = ", ".join(member.value for member in BorderStyle)
        raise ValueError(f"Unknown border style '{value}' (expected one of: {choices})") from None


def get_palette(style: Union[str, BorderStyle, None]) -> BorderPalette:
    """Return the palette for *style*, falling back to ``single`` when unknown."""

    try:
        return BORDER_PALETTES[coerce_border_style(style)]
    except ValueError as exc:
        logger.warning("%s; using single borders", exc)
        return BORDER_PALETTES[BorderStyle.SINGLE]


__all__ = ["BORDER_PALETTES", "BorderPalette", "coerce_border_style", "get_palette"]
