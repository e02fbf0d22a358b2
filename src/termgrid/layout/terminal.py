"""Terminal capabilities and style-descriptor resolution."""
from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from typing import Any, List, Optional, Set, Tuple, Union

from rich.console import Console

from ..datatypes import StyleFn, identity_style

logger = logging.getLogger(__name__)

ANSI_RESET = "\x1b[0m"
DEFAULT_TERMINAL_WIDTH = 80

CAPABILITIES = ("none", "16", "256", "truecolor")
FORCE_COLOR_ENV_VAR = "TERMGRID_FORCE_COLOR"

_RICH_COLOR_SYSTEMS = {"none": None, "16": "standard", "256": "256", "truecolor": "truecolor"}

_RGB_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class NamedStyle:
    """A palette colour name, optionally with ``.bold``/``.dim``/``.bright`` modifiers."""

    name: str


@dataclass(frozen=True)
class HexStyle:
    """A ``#rrggbb`` or ``#rgb`` foreground colour."""

    value: str


@dataclass(frozen=True)
class RgbStyle:
    """An explicit 24-bit foreground colour."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class PreResolved:
    """A caller-supplied applier used as-is."""

    apply: StyleFn


Style = Union[NamedStyle, HexStyle, RgbStyle, PreResolved]
StyleLike = Union[Style, StyleFn, str, Tuple[int, int, int], None]


def parse_style(descriptor: object) -> Optional[Style]:
    """
    Interpret a style descriptor.

    Accepts ``None``/empty (no style), a :data:`Style` instance, a callable
    applier, a 3-tuple of ints, ``"#hex"``, ``"rgb(r, g, b)"`` or a colour
    name. Anything else yields ``None``.
    """
    if descriptor is None:
        return None
    if isinstance(descriptor, (NamedStyle, HexStyle, RgbStyle, PreResolved)):
        return descriptor
    if callable(descriptor):
        return PreResolved(descriptor)
    if isinstance(descriptor, tuple) and len(descriptor) == 3:
        try:
            r, g, b = (int(part) for part in descriptor)
        except (TypeError, ValueError):
            return None
        return RgbStyle(r, g, b)
    if not isinstance(descriptor, str):
        return None
    text = descriptor.strip()
    if not text:
        return None
    if text.startswith("#"):
        return HexStyle(text)
    match = _RGB_RE.match(text)
    if match:
        r, g, b = (int(part) for part in match.groups())
        return RgbStyle(r, g, b)
    return NamedStyle(text)


def _normalise_color_name(raw: str) -> Tuple[str, Set[str]]:
    """Split ``brightRed.bold`` style names into a snake_case colour and modifiers."""

    parts = raw.split(".")
    color = _CAMEL_BOUNDARY_RE.sub("_", parts[0].strip()).lower().replace("-", "_")
    modifiers = {part.strip().lower() for part in parts[1:] if part.strip()}
    if color.endswith("_bright"):
        color = color[: -len("_bright")]
        modifiers.add("bright")
    if color.startswith("bright_"):
        color = color[len("bright_") :]
        modifiers.add("bright")
    return color, modifiers


def _hex_to_rgb(value: str) -> Optional[Tuple[int, int, int]]:
    if not _HEX_RE.match(value):
        return None
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _rgb_to_256(r: int, g: int, b: int) -> int:
    """Map a 24-bit colour onto the xterm 6x6x6 cube (or the grey ramp)."""

    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round((r - 8) / 247 * 24) + 232
    return 16 + 36 * round(r / 255 * 5) + 6 * round(g / 255 * 5) + round(b / 255 * 5)


def _rgb_to_16(r: int, g: int, b: int) -> int:
    base = 30 + (1 if r > 127 else 0) + (2 if g > 127 else 0) + (4 if b > 127 else 0)
    if max(r, g, b) > 191:
        base += 60
    return base


class AnsiColorMapper:
    """Translate style descriptors into ANSI SGR appliers."""

    _TOKEN_CODES_16 = {
        "black": 30,
        "red": 31,
        "green": 32,
        "yellow": 33,
        "orange": 33,
        "blue": 34,
        "magenta": 35,
        "purple": 35,
        "cyan": 36,
        "white": 37,
        "grey": 90,
        "gray": 90,
    }

    _TOKEN_CODES_256 = {
        "black": 0,
        "red": 203,
        "green": 84,
        "yellow": 184,
        "orange": 214,
        "blue": 75,
        "magenta": 201,
        "purple": 177,
        "cyan": 51,
        "white": 15,
        "grey": 240,
        "gray": 240,
    }

    def __init__(self, *, no_color: bool = False, capability: Optional[str] = None) -> None:
        """
        Initialize the mapper and settle on a colour capability.

        Colour is disabled when *no_color* is set or the ``NO_COLOR``
        environment variable is non-empty. An explicit *capability* (one of
        ``none``, ``16``, ``256``, ``truecolor``) skips environment detection.
        """
        env_no_color = bool(os.environ.get("NO_COLOR"))
        self.no_color = no_color or env_no_color
        self._warned: Set[str] = set()
        if self.no_color:
            self.capability = "none"
        elif capability is not None:
            normalized = str(capability).strip().lower()
            if normalized not in CAPABILITIES:
                raise ValueError(
                    f"capability must be one of: {', '.join(CAPABILITIES)} (got {capability!r})"
                )
            self.capability = normalized
        else:
            self.capability = self._detect_capability()
        logger.debug("colour capability: %s", self.capability)

    @staticmethod
    def _detect_capability() -> str:
        """
        Determine colour depth from ``TERMGRID_FORCE_COLOR``, ``COLORTERM`` and ``TERM``.

        Returns:
            str: ``"truecolor"``, ``"256"``, ``"16"`` or ``"none"`` for dumb terminals.
        """
        forced = os.environ.get(FORCE_COLOR_ENV_VAR, "").strip().lower()
        if forced in CAPABILITIES:
            return forced
        if forced and forced not in {"0", "false", "no", "off"}:
            return "256"

        colorterm = os.environ.get("COLORTERM", "").lower()
        if any(token in colorterm for token in ("truecolor", "24bit")):
            return "truecolor"
        term = os.environ.get("TERM", "").lower()
        if term == "dumb":
            return "none"
        if "256color" in term:
            return "256"
        if "truecolor" in term or "direct" in term:
            return "truecolor"
        if os.environ.get("WT_SESSION"):
            return "truecolor"
        return "16"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, descriptor: StyleLike) -> StyleFn:
        """
        Resolve *descriptor* into a ``str -> str`` applier.

        Pre-resolved callables are returned unchanged. Unknown descriptors
        resolve to the identity function and log a single warning each.
        """
        style = parse_style(descriptor)
        if style is None:
            if descriptor is not None and descriptor != "":
                self._warn_unknown(repr(descriptor))
            return identity_style
        if isinstance(style, PreResolved):
            return style.apply
        if not self._is_known(style):
            self._warn_unknown(repr(descriptor))
            return identity_style
        if self.capability == "none":
            return identity_style
        sgr = self._sgr(style)
        if not sgr:
            return identity_style

        def _apply(text: str) -> str:
            if not text:
                return text
            return f"{sgr}{text}{ANSI_RESET}"

        return _apply

    def apply(self, descriptor: StyleLike, text: str) -> str:
        """Apply *descriptor* to *text* in one call."""

        return self.resolve(descriptor)(text)

    @property
    def color_system(self) -> Optional[str]:
        """Rich ``color_system`` name matching this mapper's capability."""

        return _RICH_COLOR_SYSTEMS[self.capability]

    def make_console(self, **kwargs: Any) -> Console:
        """
        Build a Rich console whose colour handling agrees with this mapper.

        When colour is enabled the console is forced into terminal mode so
        that piped output keeps the escape codes the mapper produced, and its
        colour system is pinned so Rich does not requantise them.
        """
        if self.capability == "none":
            return Console(no_color=True, color_system=None, **kwargs)
        return Console(force_terminal=True, color_system=self.color_system, **kwargs)

    # ------------------------------------------------------------------
    # SGR construction
    # ------------------------------------------------------------------

    def _warn_unknown(self, label: str) -> None:
        if label in self._warned:
            return
        self._warned.add(label)
        logger.warning("Unknown style %s; rendering without colour", label)

    def _is_known(self, style: Style) -> bool:
        if isinstance(style, NamedStyle):
            color, _ = _normalise_color_name(style.name)
            return color in self._TOKEN_CODES_16
        if isinstance(style, HexStyle):
            return _hex_to_rgb(style.value) is not None
        if isinstance(style, RgbStyle):
            return all(0 <= channel <= 255 for channel in (style.r, style.g, style.b))
        return False

    def _sgr(self, style: Style) -> str:
        if isinstance(style, NamedStyle):
            return self._named_sgr(style.name)
        if isinstance(style, HexStyle):
            rgb = _hex_to_rgb(style.value)
            if rgb is None:
                self._warn_unknown(repr(style.value))
                return ""
            return self._rgb_sgr(*rgb)
        if isinstance(style, RgbStyle):
            channels = (style.r, style.g, style.b)
            if any(channel < 0 or channel > 255 for channel in channels):
                self._warn_unknown(f"rgb{channels}")
                return ""
            return self._rgb_sgr(*channels)
        return ""

    def _rgb_sgr(self, r: int, g: int, b: int) -> str:
        if self.capability == "truecolor":
            return f"\x1b[38;2;{r};{g};{b}m"
        if self.capability == "256":
            return f"\x1b[38;5;{_rgb_to_256(r, g, b)}m"
        return f"\x1b[{_rgb_to_16(r, g, b)}m"

    def _named_sgr(self, name: str) -> str:
        color, modifiers = _normalise_color_name(name)
        attrs: List[str] = []
        if "bold" in modifiers:
            attrs.append("1")
        if "dim" in modifiers:
            attrs.append("2")
        if "underline" in modifiers:
            attrs.append("4")

        if self.capability in ("256", "truecolor") and "bright" not in modifiers:
            code = self._TOKEN_CODES_256.get(color)
            if code is None:
                self._warn_unknown(repr(name))
                return ""
            attrs.append(f"38;5;{code}")
        else:
            base = self._TOKEN_CODES_16.get(color)
            if base is None:
                self._warn_unknown(repr(name))
                return ""
            if "bright" in modifiers and 30 <= base <= 37:
                base += 60
            attrs.append(str(base))
        return f"\x1b[{';'.join(attrs)}m"


def detect_terminal_width(fallback: int = DEFAULT_TERMINAL_WIDTH) -> int:
    """
    Return the current terminal column count.

    Honours ``COLUMNS`` and falls back to *fallback* when stdout is not a
    terminal or reports a non-positive size.
    """
    size = shutil.get_terminal_size(fallback=(fallback, 24))
    columns = size.columns
    return columns if columns > 0 else fallback


__all__: List[str] = [
    "ANSI_RESET",
    "AnsiColorMapper",
    "CAPABILITIES",
    "DEFAULT_TERMINAL_WIDTH",
    "FORCE_COLOR_ENV_VAR",
    "HexStyle",
    "NamedStyle",
    "PreResolved",
    "RgbStyle",
    "Style",
    "StyleLike",
    "detect_terminal_width",
    "parse_style",
]

