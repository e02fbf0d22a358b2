"""Configuration loader that parses and validates termgrid TOML files."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .datatypes import BorderStyle, ColorConfig, TableOptions, TermgridConfig, WidthMode
from .layout.terminal import CAPABILITIES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TERMGRID_CONFIG"


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_enum(value: Any, dotted_key: str, enum_type: type[Enum]) -> Enum:
    """Return an enum member, coercing string values case-insensitively."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            if normalized == str(member.value).lower():
                return member
    raise ConfigError(
        f"{dotted_key} must be one of: {', '.join(str(member.value) for member in enum_type)}"
    )


def _coerce_optional_int(value: Any, dotted_key: str) -> Optional[int]:
    """Return a non-negative integer, treating ``None`` as unset."""

    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{dotted_key} must be an integer")
    if value < 0:
        raise ConfigError(f"{dotted_key} must be >= 0")
    return value


def _sanitize_section(raw: Any, name: str, cls: type) -> Any:
    """
    Coerce a raw TOML table into an instance of ``cls``.

    Parameters:
        raw: Raw TOML section data.
        name: Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    cls_fields = {field.name: field for field in fields(cls)}
    unknown = sorted(set(raw) - set(cls_fields))
    if unknown:
        raise ConfigError(f"Invalid keys in [{name}]: {', '.join(unknown)}")
    cleaned: Dict[str, Any] = {}
    for key, value in raw.items():
        field_type = cls_fields[key].type
        dotted = f"{name}.{key}"
        if field_type is bool:
            cleaned[key] = _coerce_bool(value, dotted)
        elif isinstance(field_type, type) and issubclass(field_type, Enum):
            cleaned[key] = _coerce_enum(value, dotted, field_type)
        else:
            cleaned[key] = value
    return cls(**cleaned)


def _validate_table(options: TableOptions) -> TableOptions:
    padding = _coerce_optional_int(options.padding, "table.padding")
    options.padding = 0 if padding is None else padding
    options.fixed_width = _coerce_optional_int(options.fixed_width, "table.fixed_width")
    if options.width_mode is WidthMode.FIXED and options.fixed_width is None:
        raise ConfigError("table.fixed_width is required when table.width_mode = 'fixed'")
    if options.title is not None and not isinstance(options.title, str):
        raise ConfigError("table.title must be a string")
    if not isinstance(options.ellipsis, str):
        raise ConfigError("table.ellipsis must be a string")
    if not isinstance(options.border_style, BorderStyle):
        raise ConfigError("table.border_style must be a border style name")
    return options


def _validate_color(color: ColorConfig) -> ColorConfig:
    if color.capability is not None:
        normalized = str(color.capability).strip().lower()
        if normalized not in CAPABILITIES:
            raise ConfigError(f"color.capability must be one of: {', '.join(CAPABILITIES)}")
        color.capability = normalized
    return color


def parse_config(raw: Dict[str, Any]) -> TermgridConfig:
    """Validate an already-parsed TOML document."""

    unknown = sorted(set(raw) - {"table", "color"})
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")
    table = _validate_table(_sanitize_section(raw.get("table", {}), "table", TableOptions))
    color = _validate_color(_sanitize_section(raw.get("color", {}), "color", ColorConfig))
    return TermgridConfig(table=table, color=color)


def load_config(path: Union[str, Path]) -> TermgridConfig:
    """
    Load and validate a termgrid configuration from a TOML file.

    The file must be UTF-8 (a leading BOM is accepted).

    Returns:
        TermgridConfig: The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, is not UTF-8, fails to parse,
        or contains invalid values.
    """
    try:
        with open(path, "rb") as handle:
            raw_bytes = handle.read()
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration: {exc}") from exc
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        raw = tomllib.loads(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc
    config = parse_config(raw)
    logger.debug("loaded configuration from %s", path)
    return config


def resolve_config_path(explicit: Optional[str] = None) -> Optional[Path]:
    """Return the config path from *explicit* or ``TERMGRID_CONFIG``, if any."""

    candidate = explicit or os.environ.get(CONFIG_ENV_VAR)
    if not candidate:
        return None
    return Path(candidate).expanduser()


__all__ = ["CONFIG_ENV_VAR", "ConfigError", "load_config", "parse_config", "resolve_config_path"]
