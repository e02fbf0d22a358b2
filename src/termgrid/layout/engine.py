"""Column width negotiation for grid layouts."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..datatypes import Column, Row, StyledCell, WidthMode
from .measure import MeasureFn, display_width, single_line

logger = logging.getLogger(__name__)


def cell_text(cell: object) -> str:
    """Return the single-line display text of a row cell (plain string or styled pair)."""

    if isinstance(cell, StyledCell):
        return single_line(cell.text)
    if cell is None:
        return ""
    return single_line(str(cell))


def natural_width(widths: Sequence[int], padding: int) -> int:
    """Total width including padding and every vertical border (``n + 1``)."""

    count = len(widths)
    return sum(widths) + 2 * padding * count + count + 1


def table_width(widths: Sequence[int], padding: int) -> int:
    """Rendered line width: padded columns, interior separators and outer borders."""

    if not widths:
        return 0
    return sum(width + 2 * padding for width in widths) + (len(widths) - 1) + 2


def stretch_target(
    mode: WidthMode,
    *,
    fixed_width: Optional[int],
    terminal_width: Optional[int],
) -> Optional[int]:
    """
    Pick the target total width for *mode*.

    Returns:
        Optional[int]: ``fixed_width`` for FIXED, ``terminal_width`` for
        EXPAND, otherwise ``None`` (no stretching).
    """
    if mode is WidthMode.FIXED:
        return fixed_width
    if mode is WidthMode.EXPAND:
        return terminal_width
    return None


def resolve_widths(
    columns: Sequence[Column],
    rows: Sequence[Row],
    *,
    padding: int = 1,
    show_header: bool = True,
    target_width: Optional[int] = None,
    measure: MeasureFn = display_width,
) -> List[int]:
    """
    Compute one display width per column.

    Widths start from the header (when shown), are raised to ``min_width``
    and to the widest cell, then clamped to ``max_width``. When
    *target_width* exceeds the natural table width the surplus is spread
    evenly, remainder to the leftmost columns. Columns never shrink to meet
    a smaller target.

    Parameters:
        columns: Column definitions in display order.
        rows: Row cells; cells past the last column are ignored.
        padding: Spaces added on each side of every cell.
        show_header: Whether header text participates in sizing.
        target_width: Desired total width, or ``None`` to disable stretching.
        measure: Display-width function.

    Returns:
        List[int]: Resolved widths, empty when there are no columns.
    """
    count = len(columns)
    if count == 0:
        return []

    widths = [measure(single_line(column.header)) if show_header else 0 for column in columns]
    for index, column in enumerate(columns):
        if column.min_width is not None:
            widths[index] = max(widths[index], column.min_width)

    for row in rows:
        for index, cell in enumerate(row[:count]):
            widths[index] = max(widths[index], measure(cell_text(cell)))

    for index, column in enumerate(columns):
        if column.max_width is not None and widths[index] > column.max_width:
            widths[index] = column.max_width

    if target_width is not None:
        current = natural_width(widths, padding)
        if target_width > current:
            extra = target_width - current
            per_column, remainder = divmod(extra, count)
            widths = [
                width + per_column + (1 if index < remainder else 0)
                for index, width in enumerate(widths)
            ]
            logger.debug("stretched %d columns by %d cells towards %d", count, extra, target_width)

    logger.debug("resolved column widths: %s", widths)
    return widths


__all__ = ["cell_text", "natural_width", "resolve_widths", "stretch_target", "table_width"]
