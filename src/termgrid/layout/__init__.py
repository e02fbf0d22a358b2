"""Width resolution, text fitting and grid rendering for termgrid tables."""
from __future__ import annotations

from .align import align_text, truncate_text
from .borders import BORDER_PALETTES, BorderPalette, get_palette
from .engine import natural_width, resolve_widths, table_width
from .measure import display_width
from .renderer import GridRenderer
from .terminal import AnsiColorMapper, detect_terminal_width, parse_style

__all__ = [
    "AnsiColorMapper",
    "BORDER_PALETTES",
    "BorderPalette",
    "GridRenderer",
    "align_text",
    "detect_terminal_width",
    "display_width",
    "get_palette",
    "natural_width",
    "parse_style",
    "resolve_widths",
    "table_width",
    "truncate_text",
]
