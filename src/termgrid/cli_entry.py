"""Click CLI wiring and entry points for termgrid."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Dict, Optional, TextIO, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler

from .config_loader import ConfigError, load_config, resolve_config_path
from .datatypes import BorderStyle, TableOptions, TermgridConfig, WidthMode
from .demo import demo_tables
from .inputs import FORMATS, TableInputError, column_index, parse_assignment, parse_table
from .layout.align import coerce_align
from .layout.borders import BORDER_PALETTES
from .layout.terminal import FORCE_COLOR_ENV_VAR, AnsiColorMapper
from .table import Table

logger = logging.getLogger(__name__)

_ALIGN_CHOICES = ("left", "center", "right")


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""

    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _load_config(config_path: Optional[str]) -> TermgridConfig:
    path = resolve_config_path(config_path)
    if path is None:
        return TermgridConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        raise click.ClickException(f"Config error in {path}: {exc}") from exc


def _build_mapper(config: TermgridConfig, no_color: bool) -> AnsiColorMapper:
    capability = config.color.capability
    # Piped output stays plain unless colour is forced or configured.
    if (
        capability is None
        and not os.environ.get(FORCE_COLOR_ENV_VAR)
        and not click.get_text_stream("stdout").isatty()
    ):
        capability = "none"
    return AnsiColorMapper(
        no_color=no_color or config.color.no_color,
        capability=capability,
    )


def _parse_sizes(values: Tuple[str, ...], option: str) -> Dict[str, int]:
    sizes: Dict[str, int] = {}
    for raw in values:
        name, value = parse_assignment(raw, option=option)
        if not value.isdigit():
            raise TableInputError(f"{option} expects a non-negative integer for '{name}'")
        sizes[name] = int(value)
    return sizes


def _parse_aligns(values: Tuple[str, ...]) -> Dict[str, str]:
    aligns: Dict[str, str] = {}
    for raw in values:
        name, value = parse_assignment(raw, option="--align")
        if value.lower() not in _ALIGN_CHOICES:
            raise TableInputError(f"--align expects one of {', '.join(_ALIGN_CHOICES)} for '{name}'")
        aligns[name] = value.lower()
    return aligns


@click.group()
@click.option("--config", "config_path", default=None, help="Path to a termgrid TOML config (defaults to TERMGRID_CONFIG).")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
@click.option("--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], no_color: bool, verbose: bool) -> None:
    """Render bordered tables in the terminal."""

    _configure_logging(verbose)
    config = _load_config(config_path)
    mapper = _build_mapper(config, no_color)
    ctx.obj = {
        "config": config,
        "mapper": mapper,
        "console": mapper.make_console(),
    }


@main.command("render")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="auto", show_default=True, help="Input format.")
@click.option("--border", type=click.Choice([style.value for style in BorderStyle]), default=None, help="Border palette.")
@click.option("--title", default=None, help="Title banner shown above the table.")
@click.option("--no-header", is_flag=True, help="Hide the header row.")
@click.option("--separators", is_flag=True, help="Draw a separator between data rows.")
@click.option("--padding", type=click.IntRange(min=0), default=None, help="Spaces on each side of a cell.")
@click.option("--width", type=click.IntRange(min=0), default=None, help="Stretch the table to this total width.")
@click.option("--expand", is_flag=True, help="Stretch the table to the terminal width.")
@click.option("--align", "aligns", multiple=True, metavar="COL=ALIGN", help="Column alignment (left/center/right).")
@click.option("--max-width", "max_widths", multiple=True, metavar="COL=N", help="Maximum column width.")
@click.option("--min-width", "min_widths", multiple=True, metavar="COL=N", help="Minimum column width.")
@click.option("--header-color", default=None, help="Style applied to header cells.")
@click.option("--border-color", default=None, help="Style applied to borders.")
@click.pass_context
def render_command(
    ctx: click.Context,
    source: TextIO,
    fmt: str,
    border: Optional[str],
    title: Optional[str],
    no_header: bool,
    separators: bool,
    padding: Optional[int],
    width: Optional[int],
    expand: bool,
    aligns: Tuple[str, ...],
    max_widths: Tuple[str, ...],
    min_widths: Tuple[str, ...],
    header_color: Optional[str],
    border_color: Optional[str],
) -> None:
    """Render CSV, TSV or JSON from SOURCE (or stdin) as a table."""

    config: TermgridConfig = ctx.obj["config"]
    options: TableOptions = config.table_options()
    updates: Dict[str, object] = {}
    if border is not None:
        updates["border_style"] = BorderStyle(border)
    if title is not None:
        updates["title"] = title
    if no_header:
        updates["show_header"] = False
    if separators:
        updates["show_row_separator"] = True
    if padding is not None:
        updates["padding"] = padding
    if border_color is not None:
        updates["border_color"] = border_color
    if width is not None:
        updates["width_mode"] = WidthMode.FIXED
        updates["fixed_width"] = width
    elif expand:
        updates["width_mode"] = WidthMode.EXPAND
    options = replace(options, **updates)

    try:
        headers, rows = parse_table(source.read(), fmt, filename=getattr(source, "name", None))
        align_map = {column_index(headers, name): value for name, value in _parse_aligns(aligns).items()}
        max_map = {column_index(headers, name): value for name, value in _parse_sizes(max_widths, "--max-width").items()}
        min_map = {column_index(headers, name): value for name, value in _parse_sizes(min_widths, "--min-width").items()}
    except TableInputError as exc:
        raise click.ClickException(str(exc)) from exc

    logger.debug("parsed %d columns and %d rows", len(headers), len(rows))
    table = Table(options, color_mapper=ctx.obj["mapper"])
    for index, header in enumerate(headers):
        table.add_column(
            header,
            align=coerce_align(align_map.get(index)),
            min_width=min_map.get(index),
            max_width=max_map.get(index),
            header_style=header_color,
        )
    table.add_rows(rows)
    table.print(ctx.obj["console"])


@main.command("demo")
@click.pass_context
def demo_command(ctx: click.Context) -> None:
    """Print a gallery of example tables."""

    console: Console = ctx.obj["console"]
    for caption, table in demo_tables(ctx.obj["mapper"]):
        console.print(caption, markup=False, highlight=False)
        table.print(console)
        console.print()


@main.command("borders")
def borders_command() -> None:
    """List the available border palettes."""

    for style, palette in BORDER_PALETTES.items():
        glyphs = "".join(
            (palette.top_left, palette.horizontal, palette.top_t, palette.top_right, palette.vertical)
        )
        click.echo(f"{style.value:<8} {glyphs}")


__all__ = ["main"]
