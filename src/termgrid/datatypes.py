"""Configuration dataclasses and value types for termgrid tables."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

StyleFn = Callable[[str], str]


def identity_style(text: str) -> str:
    """Return *text* unchanged; used wherever no style applies."""

    return text


class Align(str, Enum):
    """Horizontal alignment of text inside a column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class BorderStyle(str, Enum):
    """Named border palettes available to the grid renderer."""

    SINGLE = "single"
    DOUBLE = "double"
    ROUNDED = "rounded"
    BOLD = "bold"
    HEAVY = "heavy"
    ASCII = "ascii"
    NONE = "none"


class WidthMode(str, Enum):
    """Policy for inflating column widths towards a target table width."""

    NONE = "none"
    FIXED = "fixed"
    EXPAND = "expand"


@dataclass(frozen=True)
class Column:
    """A positioned field definition; index in the table is its only key."""

    header: str
    align: Align = Align.LEFT
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    header_style: Optional[StyleFn] = None
    body_style: Optional[StyleFn] = None


@dataclass(frozen=True)
class StyledCell:
    """Cell text carrying a style that overrides the column body style."""

    text: str
    style: Any = None


Cell = Union[str, StyledCell]
Row = Tuple[Cell, ...]


@dataclass
class TableOptions:
    """Table-level rendering options.

    Style-valued fields accept any descriptor understood by
    :func:`termgrid.layout.terminal.parse_style`; the table resolves them
    to plain appliers once, at construction time.
    """

    title: Optional[str] = None
    title_style: Any = None
    border_style: BorderStyle = BorderStyle.SINGLE
    border_color: Any = None
    show_header: bool = True
    padding: int = 1
    show_row_separator: bool = False
    width_mode: WidthMode = WidthMode.NONE
    fixed_width: Optional[int] = None
    ellipsis: str = "…"


@dataclass
class ColorConfig:
    """Colour output switches loaded from ``[color]``."""

    no_color: bool = False
    capability: Optional[str] = None


@dataclass
class TermgridConfig:
    """Top-level configuration document."""

    table: TableOptions = field(default_factory=TableOptions)
    color: ColorConfig = field(default_factory=ColorConfig)

    def table_options(self) -> TableOptions:
        """Return a copy of the table options so callers can mutate freely."""

        return replace(self.table)
