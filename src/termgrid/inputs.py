"""Parse tabular input files (CSV, TSV, JSON) into headers and rows."""
from __future__ import annotations

import csv
import io
import json
from typing import Any, List, Sequence, Tuple

FORMATS = ("auto", "csv", "tsv", "json")


class TableInputError(ValueError):
    """Raised when tabular input cannot be parsed."""


def detect_format(text: str, *, filename: str | None = None) -> str:
    """Guess the input format from *filename* first, then from the content."""

    if filename:
        lowered = filename.lower()
        for suffix, fmt in ((".json", "json"), (".tsv", "tsv"), (".tab", "tsv"), (".csv", "csv")):
            if lowered.endswith(suffix):
                return fmt
    stripped = text.lstrip()
    if stripped.startswith(("[", "{")):
        return "json"
    first_line = stripped.splitlines()[0] if stripped else ""
    if "\t" in first_line:
        return "tsv"
    return "csv"


def _parse_delimited(text: str, delimiter: str) -> Tuple[List[str], List[List[str]]]:
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    try:
        records = [row for row in reader if row]
    except csv.Error as exc:
        raise TableInputError(f"Malformed delimited input: {exc}") from exc
    if not records:
        return [], []
    return records[0], records[1:]


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _parse_json(text: str) -> Tuple[List[str], List[List[str]]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TableInputError(f"Malformed JSON input: {exc}") from exc
    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise TableInputError("JSON input must be a list of objects or a list of lists")
    if not payload:
        return [], []

    if all(isinstance(item, dict) for item in payload):
        headers: List[str] = []
        for item in payload:
            for key in item:
                if str(key) not in headers:
                    headers.append(str(key))
        rows = [[_stringify(item.get(key)) for key in headers] for item in payload]
        return headers, rows

    if all(isinstance(item, list) for item in payload):
        records = [[_stringify(value) for value in item] for item in payload]
        return records[0], records[1:]

    raise TableInputError("JSON input must not mix objects and lists")


def parse_table(text: str, fmt: str = "auto", *, filename: str | None = None) -> Tuple[List[str], List[List[str]]]:
    """
    Parse *text* into ``(headers, rows)``.

    For CSV, TSV and JSON list-of-lists the first record is the header. For a
    JSON list of objects the headers are the union of keys in first-seen order.

    Raises:
        TableInputError: If *fmt* is unknown or the content is malformed.
    """
    resolved = fmt.lower()
    if resolved not in FORMATS:
        raise TableInputError(f"Unknown input format '{fmt}' (expected one of: {', '.join(FORMATS)})")
    if resolved == "auto":
        resolved = detect_format(text, filename=filename)
    if resolved == "json":
        return _parse_json(text)
    return _parse_delimited(text, "\t" if resolved == "tsv" else ",")


def parse_assignment(raw: str, *, option: str) -> Tuple[str, str]:
    """Split a ``COLUMN=VALUE`` command-line assignment."""

    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise TableInputError(f"{option} expects COLUMN=VALUE (got {raw!r})")
    return name.strip(), value.strip()


def column_index(headers: Sequence[str], name: str) -> int:
    """Resolve a column by header text or by 1-based position."""

    if name in headers:
        return list(headers).index(name)
    if name.isdigit():
        index = int(name) - 1
        if 0 <= index < len(headers):
            return index
    raise TableInputError(f"Unknown column '{name}'")


__all__ = [
    "FORMATS",
    "TableInputError",
    "column_index",
    "detect_format",
    "parse_assignment",
    "parse_table",
]
