"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from termgrid.config_loader import (
    CONFIG_ENV_VAR,
    ConfigError,
    load_config,
    parse_config,
    resolve_config_path,
)
from termgrid.datatypes import BorderStyle, TermgridConfig, WidthMode


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "termgrid.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_empty_document_uses_defaults() -> None:
    config = parse_config({})
    assert config == TermgridConfig()
    assert config.table.border_style is BorderStyle.SINGLE
    assert config.table.padding == 1


def test_load_full_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[table]
title = "Inventory"
title_style = "cyan.bold"
border_style = "Double"
border_color = "#888888"
show_header = 1
padding = 2
show_row_separator = "true"
width_mode = "fixed"
fixed_width = 60
ellipsis = "..."

[color]
no_color = false
capability = "256"
""",
    )
    config = load_config(path)
    table = config.table
    assert table.title == "Inventory"
    assert table.title_style == "cyan.bold"
    assert table.border_style is BorderStyle.DOUBLE
    assert table.show_header is True
    assert table.padding == 2
    assert table.show_row_separator is True
    assert table.width_mode is WidthMode.FIXED
    assert table.fixed_width == 60
    assert table.ellipsis == "..."
    assert config.color.capability == "256"


def test_table_options_returns_independent_copy(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, '[table]\ntitle = "One"\n'))
    options = config.table_options()
    options.title = "Two"
    assert config.table.title == "One"


def test_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "bom.toml"
    path.write_bytes(b"\xef\xbb\xbf[table]\npadding = 0\n")
    assert load_config(path).table.padding == 0


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("[table]\nborder = 'single'\n", "Invalid keys in \\[table\\]: border"),
        ("[tables]\n", "Unknown configuration sections: tables"),
        ("[table]\nborder_style = 'dotted'\n", "table.border_style must be one of"),
        ("[table]\nshow_header = 'maybe'\n", "table.show_header must be a boolean"),
        ("[table]\npadding = -1\n", "table.padding must be >= 0"),
        ("[table]\npadding = 1.5\n", "table.padding must be an integer"),
        ("[table]\nwidth_mode = 'fixed'\n", "table.fixed_width is required"),
        ("[table]\ntitle = 3\n", "table.title must be a string"),
        ("[color]\ncapability = 'million'\n", "color.capability must be one of"),
        ("table = 1\n", "\\[table\\] must be a table"),
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, body: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        load_config(_write(tmp_path, body))


def test_malformed_toml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to parse TOML"):
        load_config(_write(tmp_path, "[table\n"))


def test_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "latin1.toml"
    path.write_bytes('[table]\ntitle = "caf\xe9"\n'.encode("latin-1"))
    with pytest.raises(ConfigError, match="UTF-8"):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to read configuration"):
        load_config(tmp_path / "absent.toml")


def test_resolve_config_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    assert resolve_config_path(None) is None
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
    assert resolve_config_path(None) == tmp_path / "env.toml"
    assert resolve_config_path(str(tmp_path / "cli.toml")) == tmp_path / "cli.toml"
