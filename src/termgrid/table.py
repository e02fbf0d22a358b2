"""Table builder: accumulates columns and rows and renders them on demand."""
from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from rich.console import Console
from rich.text import Text

from .datatypes import Align, Column, Row, StyledCell, StyleFn, TableOptions, WidthMode
from .layout.align import coerce_align
from .layout.borders import coerce_border_style, get_palette
from .layout.engine import resolve_widths, stretch_target
from .layout.measure import MeasureFn, display_width
from .layout.renderer import GridRenderer
from .layout.terminal import AnsiColorMapper, StyleLike, detect_terminal_width

logger = logging.getLogger(__name__)

_OPTION_FIELDS = {item.name for item in fields(TableOptions)}

# Option spellings carried over from the JavaScript-style API.
_OPTION_ALIASES: Dict[str, str] = {
    "titleColor": "title_style",
    "title_color": "title_style",
    "borderStyle": "border_style",
    "borderColor": "border_color",
    "showHeader": "show_header",
    "showRowSeparator": "show_row_separator",
    "widthMode": "width_mode",
    "fixedWidth": "fixed_width",
}

_COLUMN_ALIASES: Dict[str, str] = {
    "minWidth": "min_width",
    "maxWidth": "max_width",
    "headerColor": "header_style",
    "header_color": "header_style",
    "columnColor": "body_style",
    "column_color": "body_style",
    "bodyStyle": "body_style",
    "headerStyle": "header_style",
}

ColumnSpec = Union[str, Column, Mapping[str, Any]]


def _merge_options(options: Optional[TableOptions], overrides: Mapping[str, Any]) -> TableOptions:
    """
    Return *options* updated with keyword overrides.

    ``width=N`` selects a fixed target width and ``expand=True`` selects the
    terminal width; an explicit width wins when both are given.

    Raises:
        TypeError: If an override names no known option.
    """
    base = replace(options) if options is not None else TableOptions()
    updates: Dict[str, Any] = {}
    width = overrides.get("width")
    expand = overrides.get("expand")
    for key, value in overrides.items():
        if key in ("width", "expand", "fullWidth", "full_width"):
            continue
        name = _OPTION_ALIASES.get(key, key)
        if name not in _OPTION_FIELDS:
            raise TypeError(f"Unknown table option '{key}'")
        updates[name] = value
    if width:
        updates["width_mode"] = WidthMode.FIXED
        updates["fixed_width"] = int(width)
    elif expand:
        updates["width_mode"] = WidthMode.EXPAND
    merged = replace(base, **updates)
    if not isinstance(merged.width_mode, WidthMode):
        merged.width_mode = WidthMode(str(merged.width_mode).strip().lower())
    return merged


class Table:
    """
    Build a bordered table by chaining :meth:`add_column` and :meth:`add_row`.

    Style descriptors (colour names, ``#hex``, ``rgb(...)``, callables) are
    resolved once when they enter the table; rendering only ever sees plain
    ``str -> str`` appliers. :meth:`render` is a pure function of the
    accumulated state and may be called any number of times.
    """

    def __init__(
        self,
        options: Optional[TableOptions] = None,
        *,
        measure: MeasureFn = display_width,
        color_mapper: Optional[AnsiColorMapper] = None,
        width_provider: Callable[[], int] = detect_terminal_width,
        **overrides: Any,
    ) -> None:
        self.options = _merge_options(options, overrides)
        try:
            self.options.border_style = coerce_border_style(self.options.border_style)
        except ValueError as exc:
            logger.warning("%s; using single borders", exc)
            self.options.border_style = coerce_border_style(None)
        self._measure = measure
        self._mapper = color_mapper or AnsiColorMapper()
        self._width_provider = width_provider
        self._title_style = self._resolve(self.options.title_style)
        self._border_color = self._resolve(self.options.border_color)
        self._columns: List[Column] = []
        self._rows: List[Row] = []

    # ------------------------------------------------------------------
    # Builder API
    # ------------------------------------------------------------------

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def rows(self) -> Tuple[Row, ...]:
        return tuple(self._rows)

    def _resolve(self, descriptor: StyleLike) -> Optional[StyleFn]:
        if descriptor is None:
            return None
        return self._mapper.resolve(descriptor)

    def add_column(
        self,
        header: str,
        *,
        align: Union[str, Align] = Align.LEFT,
        min_width: Optional[int] = None,
        max_width: Optional[int] = None,
        header_style: StyleLike = None,
        body_style: StyleLike = None,
    ) -> "Table":
        """Append a column definition and return the table for chaining."""

        self._columns.append(
            Column(
                header=str(header),
                align=coerce_align(align),
                min_width=min_width,
                max_width=max_width,
                header_style=self._resolve(header_style),
                body_style=self._resolve(body_style),
            )
        )
        return self

    def add_row(self, *cells: Any) -> "Table":
        """
        Append one row and return the table for chaining.

        Cells may be strings, :class:`StyledCell` instances, or mappings with
        ``text`` and an optional ``style``/``color``. Other values are
        stringified and ``None`` becomes an empty cell. No arity check is done
        here; short and long rows are reconciled at render time.
        """
        self._rows.append(tuple(self._normalise_cell(cell) for cell in cells))
        return self

    def add_rows(self, rows: Iterable[Sequence[Any]]) -> "Table":
        """Append several rows at once."""

        for row in rows:
            self.add_row(*row)
        return self

    def _normalise_cell(self, cell: Any) -> Union[str, StyledCell]:
        if isinstance(cell, StyledCell):
            return StyledCell(str(cell.text), self._resolve(cell.style))
        if isinstance(cell, Mapping):
            text = cell.get("text", "")
            style = cell.get("style", cell.get("color"))
            text = "" if text is None else str(text)
            if style is None:
                return text
            return StyledCell(text, self._resolve(style))
        if cell is None:
            return ""
        return str(cell)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, *, terminal_width: Optional[int] = None) -> str:
        """
        Render the table to a newline-joined string.

        Parameters:
            terminal_width: Terminal column count used by ``expand`` mode. When
                omitted the width provider is consulted once per call.

        Returns:
            str: The rendered table, or ``""`` when no columns were added.
        """
        if not self._columns:
            return ""
        options = self.options
        if options.width_mode is WidthMode.EXPAND and terminal_width is None:
            terminal_width = self._width_provider()
        target = stretch_target(
            options.width_mode,
            fixed_width=options.fixed_width,
            terminal_width=terminal_width,
        )
        widths = resolve_widths(
            self._columns,
            self._rows,
            padding=options.padding,
            show_header=options.show_header,
            target_width=target,
            measure=self._measure,
        )
        renderer = GridRenderer(
            get_palette(options.border_style),
            padding=options.padding,
            border_color=self._border_color,
            measure=self._measure,
            ellipsis=options.ellipsis,
        )
        return renderer.render(
            self._columns,
            self._rows,
            widths,
            title=options.title,
            title_style=self._title_style,
            show_header=options.show_header,
            show_row_separator=options.show_row_separator,
        )

    def print(self, console: Optional[Console] = None) -> None:
        """
        Write the rendered table to *console*.

        Without a console, one matching the colour mapper is built so the
        escape codes chosen at resolve time reach stdout unchanged.
        """

        target = console or self._mapper.make_console()
        target.print(Text.from_ansi(self.render()), soft_wrap=True)

    def __str__(self) -> str:
        return self.render()


def _column_kwargs(spec: Mapping[str, Any]) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for key, value in spec.items():
        if key == "header":
            continue
        kwargs[_COLUMN_ALIASES.get(key, key)] = value
    return kwargs


def create_table(
    columns: Sequence[ColumnSpec],
    rows: Iterable[Sequence[Any]],
    options: Optional[TableOptions] = None,
    **kwargs: Any,
) -> str:
    """
    Build and render a table in one call.

    Each column spec is a header string, a :class:`Column`, or a mapping with
    ``header`` plus column keywords (camelCase spellings accepted).

    Returns:
        str: The rendered table.
    """
    table = Table(options, **kwargs)
    for spec in columns:
        if isinstance(spec, Column):
            table.add_column(
                spec.header,
                align=spec.align,
                min_width=spec.min_width,
                max_width=spec.max_width,
                header_style=spec.header_style,
                body_style=spec.body_style,
            )
        elif isinstance(spec, Mapping):
            table.add_column(str(spec.get("header", "")), **_column_kwargs(spec))
        else:
            table.add_column(str(spec))
    table.add_rows(rows)
    return table.render()


__all__ = ["ColumnSpec", "Table", "create_table"]
