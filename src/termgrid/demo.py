"""Example tables shown by ``termgrid demo``."""
from __future__ import annotations

from typing import List, Optional, Tuple

from .datatypes import BorderStyle, StyledCell
from .layout.terminal import AnsiColorMapper
from .table import Table


def border_gallery(mapper: Optional[AnsiColorMapper] = None) -> List[Tuple[str, Table]]:
    """One small headerless table per border palette."""

    gallery: List[Tuple[str, Table]] = []
    for style in BorderStyle:
        table = Table(border_style=style, show_header=False, color_mapper=mapper)
        table.add_column("Style").add_column("Example")
        table.add_row(style.value, "Sample")
        table.add_row("Row 2", "Data")
        gallery.append((f"Border style: {style.value}", table))
    return gallery


def width_gallery(mapper: Optional[AnsiColorMapper] = None) -> List[Tuple[str, Table]]:
    """Natural growth, ``max_width`` truncation and ``min_width`` padding."""

    rows = [
        ("1", "Alice", "This is a very long description that will make the column grow"),
        ("2", "Bob", "Another long description to demonstrate natural table growth"),
        ("3", "Charlie", "Database connection timeout after 30 seconds - truncated here!"),
    ]

    natural = Table(title="Table Growing Naturally", border_color="green", color_mapper=mapper)
    natural.add_column("ID").add_column("Name").add_column("Description").add_rows(rows)

    capped = Table(title="Table with max_width", border_color="yellow", color_mapper=mapper)
    capped.add_column("ID").add_column("Name").add_column("Description", max_width=40).add_rows(rows)

    padded = Table(title="Table with min_width", border_color="cyan", color_mapper=mapper)
    padded.add_column("ID").add_column("Name").add_column("Status", min_width=50)
    padded.add_rows([("1", "Alice", "OK"), ("2", "Bob", "Active"), ("3", "Charlie", "Running")])

    stretched = Table(title="Fixed width 60", border_style="rounded", width=60, color_mapper=mapper)
    stretched.add_column("Key").add_column("Value", align="right")
    stretched.add_rows([("alpha", "1"), ("beta", "22"), ("gamma", "333")])

    return [
        ("No max_width: columns grow to fit", natural),
        ("max_width=40: long content is truncated", capped),
        ("min_width=50: column keeps a minimum width", padded),
        ("width=60: surplus spread across columns", stretched),
    ]


def styled_gallery(mapper: Optional[AnsiColorMapper] = None) -> List[Tuple[str, Table]]:
    """Coloured headers, per-cell overrides, row separators and wide glyphs."""

    status = Table(
        title="Server Status",
        title_style="cyan.bold",
        border_style="double",
        border_color="#4ECDC4",
        show_row_separator=True,
        color_mapper=mapper,
    )
    status.add_column("Server", header_style="brightYellow")
    status.add_column("Status", header_style="brightYellow", align="center")
    status.add_column("CPU", header_style="brightYellow", align="right")
    status.add_row("web-01", StyledCell("● Online", "green"), "45%")
    status.add_row("web-02", StyledCell("● Online", "green"), "23%")
    status.add_row("db-01", StyledCell("○ Offline", "red"), "N/A")

    inventory = Table(border_style="bold", border_color="rgb(255, 107, 107)", padding=2, color_mapper=mapper)
    inventory.add_column("Product", body_style="cyan")
    inventory.add_column("Price", align="right")
    inventory.add_column("Stock", align="center")
    inventory.add_row("Widget", "$19.99", {"text": "✓", "color": "green"})
    inventory.add_row("Gadget", "$49.99", {"text": "✗", "color": "red"})
    inventory.add_row("Doohickey", "$9.99", {"text": "✓", "color": "green"})

    wide = Table(title="Unicode", border_style="ascii", color_mapper=mapper)
    wide.add_column("Glyph").add_column("Meaning", max_width=12)
    wide.add_row("日本語", "Japanese text with double-width cells")
    wide.add_row("🚀", "Rocket")
    wide.add_row("é", "Combining accent")

    return [
        ("Coloured cells with row separators", status),
        ("Column body colour and padding=2", inventory),
        ("Wide and combining characters", wide),
    ]


def nested_gallery(mapper: Optional[AnsiColorMapper] = None) -> List[Tuple[str, Table]]:
    """A rendered table embedded line by line in an outer table's cells."""

    inner = Table(border_style="rounded", color_mapper=mapper)
    inner.add_column("Key").add_column("Value", align="right")
    inner.add_rows([("hits", "1024"), ("misses", "12")])
    inner_lines = inner.render().splitlines()

    outer = Table(title="Cache Report", color_mapper=mapper)
    outer.add_column("Node").add_column("Stats")
    for index, line in enumerate(inner_lines):
        outer.add_row("cache-01" if index == 0 else "", line)
    return [("Table nested in a cell", outer)]


def demo_tables(mapper: Optional[AnsiColorMapper] = None) -> List[Tuple[str, Table]]:
    """Every demo table, in display order."""

    return (
        border_gallery(mapper)
        + width_gallery(mapper)
        + styled_gallery(mapper)
        + nested_gallery(mapper)
    )


__all__ = ["border_gallery", "demo_tables", "nested_gallery", "styled_gallery", "width_gallery"]
