"""Bordered, width-fitted tables for terminal output."""
from __future__ import annotations

from .config_loader import ConfigError, load_config
from .datatypes import (
    Align,
    BorderStyle,
    Cell,
    Column,
    StyledCell,
    StyleFn,
    TableOptions,
    TermgridConfig,
    WidthMode,
)
from .layout.align import align_text, truncate_text
from .layout.measure import display_width
from .layout.terminal import (
    AnsiColorMapper,
    HexStyle,
    NamedStyle,
    PreResolved,
    RgbStyle,
    detect_terminal_width,
    parse_style,
)
from .table import Table, create_table

__version__ = "0.1.0"

__all__ = [
    "Align",
    "AnsiColorMapper",
    "BorderStyle",
    "Cell",
    "Column",
    "ConfigError",
    "HexStyle",
    "NamedStyle",
    "PreResolved",
    "RgbStyle",
    "StyleFn",
    "StyledCell",
    "Table",
    "TableOptions",
    "TermgridConfig",
    "WidthMode",
    "align_text",
    "create_table",
    "detect_terminal_width",
    "display_width",
    "load_config",
    "parse_style",
    "truncate_text",
]
