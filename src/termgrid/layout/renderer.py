"""Compose bordered grid lines from resolved column widths."""
from __future__ import annotations

from typing import List, Optional, Sequence

from ..datatypes import Column, Row, StyledCell, StyleFn, identity_style
from .align import DEFAULT_ELLIPSIS, align_text
from .borders import BorderPalette
from .engine import cell_text, table_width
from .measure import MeasureFn, display_width, single_line


class GridRenderer:
    """Render a table grid with a fixed palette, padding and border style."""

    def __init__(
        self,
        palette: BorderPalette,
        *,
        padding: int = 1,
        border_color: Optional[StyleFn] = None,
        measure: MeasureFn = display_width,
        ellipsis: str = DEFAULT_ELLIPSIS,
    ) -> None:
        self.palette = palette
        self.padding = max(0, padding)
        self._border = border_color or identity_style
        self._measure = measure
        self._ellipsis = ellipsis

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(
        self,
        columns: Sequence[Column],
        rows: Sequence[Row],
        widths: Sequence[int],
        *,
        title: Optional[str] = None,
        title_style: Optional[StyleFn] = None,
        show_header: bool = True,
        show_row_separator: bool = False,
    ) -> str:
        """
        Render the full grid as newline-joined lines.

        Emits, in order: optional title banner, top border, optional header
        row with its separator, data rows (with separators between them when
        enabled), and the bottom border.

        Returns:
            str: The rendered block, or ``""`` when there are no columns.
        """
        if not columns:
            return ""

        palette = self.palette
        lines: List[str] = []

        if title:
            lines.append(self._title_line(title, widths, title_style))

        lines.append(self._rule(palette.top_left, palette.top_t, palette.top_right, widths))

        if show_header:
            headers = [column.header for column in columns]
            lines.append(self._row_line(columns, headers, widths, header=True))
            lines.append(self._separator(widths))

        last_index = len(rows) - 1
        for index, row in enumerate(rows):
            lines.append(self._row_line(columns, row, widths))
            if show_row_separator and index < last_index:
                lines.append(self._separator(widths))

        lines.append(
            self._rule(palette.bottom_left, palette.bottom_t, palette.bottom_right, widths)
        )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Line builders
    # ------------------------------------------------------------------

    def _paint_border(self, text: str) -> str:
        return self._border(text) if text else text

    def _rule(self, left: str, middle: str, right: str, widths: Sequence[int]) -> str:
        runs = [self.palette.horizontal * (width + self.padding * 2) for width in widths]
        return self._paint_border(left + middle.join(runs) + right)

    def _separator(self, widths: Sequence[int]) -> str:
        palette = self.palette
        return self._rule(palette.left_t, palette.cross, palette.right_t, widths)

    def _cell_style(self, column: Column, cell: object, *, header: bool) -> StyleFn:
        if isinstance(cell, StyledCell) and callable(cell.style):
            return cell.style
        if header and column.header_style is not None:
            return column.header_style
        if column.body_style is not None:
            return column.body_style
        return identity_style

    def _row_line(
        self,
        columns: Sequence[Column],
        cells: Sequence[object],
        widths: Sequence[int],
        *,
        header: bool = False,
    ) -> str:
        pad = " " * self.padding
        rendered: List[str] = []
        for index, column in enumerate(columns):
            cell = cells[index] if index < len(cells) else ""
            aligned = align_text(
                cell_text(cell),
                widths[index],
                column.align,
                measure=self._measure,
                ellipsis=self._ellipsis,
            )
            style = self._cell_style(column, cell, header=header)
            rendered.append(pad + (style(aligned) if aligned else aligned) + pad)
        vertical = self._paint_border(self.palette.vertical)
        return vertical + vertical.join(rendered) + vertical

    def _title_line(
        self,
        title: str,
        widths: Sequence[int],
        title_style: Optional[StyleFn],
    ) -> str:
        total = table_width(widths, self.padding)
        title = single_line(title)
        label = f" {title} "
        if self._measure(label) > total:
            inner = align_text(
                title, max(0, total - 2), measure=self._measure, ellipsis=self._ellipsis
            )
            label = f" {inner} "
        available = max(0, total - self._measure(label))
        left_span = available // 2
        right_span = available - left_span
        horizontal = self.palette.horizontal
        styled_label = (title_style or identity_style)(label)
        return (
            self._paint_border(horizontal * left_span)
            + styled_label
            + self._paint_border(horizontal * right_span)
        )


__all__ = ["GridRenderer"]
