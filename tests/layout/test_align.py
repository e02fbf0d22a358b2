from __future__ import annotations

import pytest

from termgrid.datatypes import Align
from termgrid.layout.align import align_text, coerce_align, truncate_text
from termgrid.layout.measure import display_width


@pytest.mark.parametrize(
    ("align", "expected"),
    [
        (Align.LEFT, "ab   "),
        (Align.RIGHT, "   ab"),
        (Align.CENTER, " ab  "),
    ],
)
def test_align_pads_to_width(align: Align, expected: str) -> None:
    assert align_text("ab", 5, align) == expected


def test_center_even_padding_is_balanced() -> None:
    assert align_text("ab", 6, "center") == "  ab  "


def test_exact_fit_is_unchanged() -> None:
    assert align_text("abc", 3, Align.RIGHT) == "abc"


def test_truncation_appends_ellipsis() -> None:
    result = align_text("This is a very long description", 10)
    assert result == "This is a…"
    assert display_width(result) == 10


def test_truncation_ignores_alignment() -> None:
    assert align_text("abcdef", 4, Align.RIGHT) == "abc…"


def test_width_one_keeps_only_ellipsis() -> None:
    assert align_text("abc", 1) == "…"


@pytest.mark.parametrize("width", [0, -3])
def test_non_positive_width_is_empty(width: int) -> None:
    assert align_text("abc", width) == ""
    assert truncate_text("abc", width) == ""


def test_wide_characters_pad_after_truncation() -> None:
    result = align_text("日本語", 4)
    assert result == "日… "
    assert display_width(result) == 4


def test_wide_characters_fill_when_possible() -> None:
    assert align_text("日本語テキスト", 5) == "日本…"


def test_ansi_text_that_fits_keeps_escape_codes() -> None:
    styled = "\x1b[31mok\x1b[0m"
    assert align_text(styled, 4) == styled + "  "


def test_ansi_text_is_stripped_when_truncated() -> None:
    assert align_text("\x1b[31mabcdef\x1b[0m", 4) == "abc…"


def test_wide_ellipsis_that_cannot_fit_yields_blank_cell() -> None:
    assert align_text("abcdef", 1, ellipsis="……") == " "


def test_truncate_text_returns_fitting_text_untouched() -> None:
    assert truncate_text("abc", 5) == "abc"


def test_coerce_align_defaults_to_left() -> None:
    assert coerce_align(None) is Align.LEFT
    assert coerce_align("sideways") is Align.LEFT
    assert coerce_align(" Right ") is Align.RIGHT


@pytest.mark.parametrize(
    "text",
    ["", "a", "hello world", "日本語テキスト", "🚀 launch", "éclair", "x" * 40],
)
@pytest.mark.parametrize("width", [0, 1, 2, 5, 9, 30])
@pytest.mark.parametrize("align", list(Align))
def test_align_width_and_idempotence(text: str, width: int, align: Align) -> None:
    once = align_text(text, width, align)
    assert display_width(once) == width
    assert align_text(once, width, align) == once
    if display_width(text) > width > 0:
        assert once.rstrip(" ").endswith("…")
