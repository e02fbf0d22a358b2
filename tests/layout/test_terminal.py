from __future__ import annotations

import logging
import os

import pytest

from termgrid.datatypes import identity_style
from termgrid.layout.terminal import (
    AnsiColorMapper,
    HexStyle,
    NamedStyle,
    PreResolved,
    RgbStyle,
    detect_terminal_width,
    parse_style,
)


def _shout(text: str) -> str:
    return text.upper()


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        (None, None),
        ("", None),
        ("red", NamedStyle("red")),
        ("#FF6B6B", HexStyle("#FF6B6B")),
        ("rgb(1, 2, 3)", RgbStyle(1, 2, 3)),
        ((10, 20, 30), RgbStyle(10, 20, 30)),
        (HexStyle("#000"), HexStyle("#000")),
        (42, None),
    ],
)
def test_parse_style(descriptor: object, expected: object) -> None:
    assert parse_style(descriptor) == expected


def test_parse_style_wraps_callables() -> None:
    assert parse_style(_shout) == PreResolved(_shout)


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        ("red", "\x1b[31mx\x1b[0m"),
        ("red.bold", "\x1b[1;31mx\x1b[0m"),
        ("brightRed", "\x1b[91mx\x1b[0m"),
        ("redBright", "\x1b[91mx\x1b[0m"),
        ("bright_cyan", "\x1b[96mx\x1b[0m"),
        ("gray", "\x1b[90mx\x1b[0m"),
        ("#ff0000", "\x1b[91mx\x1b[0m"),
        ("rgb(0, 128, 0)", "\x1b[32mx\x1b[0m"),
    ],
)
def test_sixteen_colour_sequences(descriptor: str, expected: str) -> None:
    mapper = AnsiColorMapper(capability="16")
    assert mapper.apply(descriptor, "x") == expected


def test_256_colour_sequences() -> None:
    mapper = AnsiColorMapper(capability="256")
    assert mapper.apply("red", "x") == "\x1b[38;5;203mx\x1b[0m"
    assert mapper.apply("#ff0000", "x") == "\x1b[38;5;196mx\x1b[0m"
    assert mapper.apply("#808080", "x") == "\x1b[38;5;244mx\x1b[0m"


def test_truecolor_sequences() -> None:
    mapper = AnsiColorMapper(capability="truecolor")
    assert mapper.apply("#f00", "x") == "\x1b[38;2;255;0;0mx\x1b[0m"
    assert mapper.apply(RgbStyle(1, 2, 3), "x") == "\x1b[38;2;1;2;3mx\x1b[0m"


def test_empty_text_is_not_wrapped() -> None:
    assert AnsiColorMapper(capability="16").apply("red", "") == ""


def test_pre_resolved_applier_is_used_as_is() -> None:
    mapper = AnsiColorMapper(no_color=True)
    assert mapper.resolve(_shout) is _shout


def test_no_color_resolves_to_identity() -> None:
    assert AnsiColorMapper(no_color=True).resolve("red") is identity_style


def test_no_color_environment_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    mapper = AnsiColorMapper(capability="truecolor")
    assert mapper.capability == "none"
    assert mapper.apply("red", "x") == "x"


@pytest.mark.parametrize("descriptor", ["chartreuse-ish", "#12", "rgb(300, 0, 0)", 3.5])
def test_unknown_descriptors_fall_back_to_identity(
    descriptor: object, caplog: pytest.LogCaptureFixture
) -> None:
    mapper = AnsiColorMapper(capability="16")
    with caplog.at_level(logging.WARNING, logger="termgrid.layout.terminal"):
        assert mapper.apply(descriptor, "x") == "x"
        mapper.apply(descriptor, "y")
    warnings = [record for record in caplog.records if "Unknown style" in record.getMessage()]
    assert len(warnings) == 1


def test_invalid_capability_is_rejected() -> None:
    with pytest.raises(ValueError):
        AnsiColorMapper(capability="65536")


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({}, "16"),
        ({"TERMGRID_FORCE_COLOR": "truecolor"}, "truecolor"),
        ({"TERMGRID_FORCE_COLOR": "yes"}, "256"),
        ({"COLORTERM": "truecolor"}, "truecolor"),
        ({"TERM": "xterm-256color"}, "256"),
        ({"TERM": "dumb"}, "none"),
    ],
)
def test_capability_detection(
    env: dict, expected: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    assert AnsiColorMapper().capability == expected


def test_detect_terminal_width_honours_columns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLUMNS", "132")
    assert detect_terminal_width() == 132


def test_detect_terminal_width_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COLUMNS", raising=False)
    monkeypatch.setattr(
        "termgrid.layout.terminal.shutil.get_terminal_size",
        lambda fallback: os.terminal_size(fallback),
    )
    assert detect_terminal_width(fallback=77) == 77


def test_unknown_name_warns_even_without_colour(caplog: pytest.LogCaptureFixture) -> None:
    mapper = AnsiColorMapper(no_color=True)
    with caplog.at_level(logging.WARNING, logger="termgrid.layout.terminal"):
        assert mapper.resolve("chartreuse-ish") is identity_style
        assert mapper.resolve("rgb(300, 0, 0)") is identity_style
        assert mapper.resolve("brightRed.bold") is identity_style
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 2
    assert "chartreuse-ish" in messages[0]


@pytest.mark.parametrize(
    ("capability", "expected"),
    [("16", "standard"), ("256", "256"), ("truecolor", "truecolor")],
)
def test_make_console_matches_capability(capability: str, expected: str) -> None:
    console = AnsiColorMapper(capability=capability).make_console()
    assert console.is_terminal
    assert console.color_system == expected


def test_make_console_without_colour() -> None:
    console = AnsiColorMapper(no_color=True).make_console()
    assert console.color_system is None
    assert console.no_color
