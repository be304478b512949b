"""Front-matter parsing for Folio.

This module splits a raw document into its front-matter block and its body,
and turns the block into a Metadata value.

The first line of the document selects the front-matter format:
- ``---`` YAML
- ``+++`` TOML
- ``;;;`` JSON

The block ends at the next line consisting of the same delimiter. Everything
after that line is the body, returned byte-for-byte. A document without an
opening delimiter has no front matter and is therefore unpublished.

Key functions:
- parse_frontmatter: Parse a raw document into (Metadata, body).
- split_frontmatter: Locate the front-matter block without decoding it.
- metadata_from_mapping: Convert decoded front matter into Metadata.
"""

from __future__ import annotations

import functools
import json
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

import yaml

from .content import Metadata
from .errors import ParseError

BOM = b"\xef\xbb\xbf"

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off", ""}

# Front-matter key -> Metadata attribute
KNOWN_KEYS = {
    "title": "title",
    "desc": "description",
    "date": "date",
    "status": "published",
    "css": "css",
    "js": "js",
}

# Keys read as plain text
TEXT_KEYS = ("title", "desc", "css", "js")


@dataclass(frozen=True)
class FrontmatterFormat:
    """A front-matter syntax recognised by its delimiter line.

    Attributes:
        name: Human-readable format name used in error messages.
        delimiter: Line that opens and closes the block.
        load: Function decoding the block text into Python data.
        errors: Exceptions ``load`` raises on malformed input.
        load_text: Optional second decoder that keeps scalars as written,
            used for the text fields.
    """

    name: str
    delimiter: bytes
    load: Callable[[str], Any]
    errors: tuple[type[Exception], ...]
    load_text: Callable[[str], Any] | None = None


FORMATS = (
    FrontmatterFormat(
        "YAML",
        b"---",
        yaml.safe_load,
        (yaml.YAMLError,),
        functools.partial(yaml.load, Loader=yaml.BaseLoader),
    ),
    FrontmatterFormat("TOML", b"+++", tomllib.loads, (tomllib.TOMLDecodeError,)),
    FrontmatterFormat("JSON", b";;;", json.loads, (json.JSONDecodeError,)),
)


def _format_for(line: bytes) -> FrontmatterFormat | None:
    for fmt in FORMATS:
        if line.rstrip() == fmt.delimiter:
            return fmt
    return None


def split_frontmatter(raw: bytes) -> tuple[FrontmatterFormat | None, bytes, bytes]:
    """Split a raw document into its front-matter block and body.

    Args:
        raw: Complete file content.

    Returns:
        Tuple of (format or None, block bytes, body bytes). When the document
        has no front matter the format is None and the body is ``raw``.

    Raises:
        ParseError: If an opening delimiter is never closed.
    """
    text = raw[len(BOM) :] if raw.startswith(BOM) else raw
    lines = text.splitlines(keepends=True)
    if not lines:
        return None, b"", raw
    fmt = _format_for(lines[0])
    if fmt is None:
        return None, b"", raw

    start = offset = len(lines[0])
    for line in lines[1:]:
        if line.rstrip() == fmt.delimiter:
            return fmt, text[start:offset], text[offset + len(line) :]
        offset += len(line)
    raise ParseError(
        f"{fmt.name} front matter opened with {fmt.delimiter.decode()!r} is never closed"
    )


def parse_frontmatter(raw: bytes) -> tuple[Metadata, bytes]:
    """Parse the front matter of a raw document.

    Args:
        raw: Complete file content.

    Returns:
        Tuple of (Metadata, body bytes). The body is passed through unmodified.

    Raises:
        ParseError: If the front-matter block is malformed.
    """
    fmt, block, body = split_frontmatter(raw)
    if fmt is None:
        return Metadata(), body

    try:
        text = block.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Front matter is not valid UTF-8: {exc}") from exc

    try:
        data = fmt.load(text) if text.strip() else {}
    except fmt.errors as exc:
        raise ParseError(f"Invalid {fmt.name} front matter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ParseError(
            f"{fmt.name} front matter must be a mapping, got {type(data).__name__}"
        )
    if fmt.load_text is not None and data:
        try:
            data = _with_text_as_written(data, fmt.load_text(text))
        except fmt.errors as exc:
            raise ParseError(f"Invalid {fmt.name} front matter: {exc}") from exc
    return metadata_from_mapping(data), body


def _with_text_as_written(data: Mapping[str, Any], raw: Any) -> Mapping[str, Any]:
    """Replace resolved scalars in the text fields with their source spelling.

    ``title: 2024-05-01`` stays ``"2024-05-01"`` rather than a date, and
    ``title: Yes`` stays ``"Yes"`` rather than True.
    """
    if not isinstance(raw, Mapping):
        return data
    merged = dict(data)
    for key in TEXT_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, str) and isinstance(raw.get(key), str):
            merged[key] = raw[key]
    return merged


def metadata_from_mapping(data: Mapping[str, Any]) -> Metadata:
    """Convert decoded front matter into Metadata.

    Args:
        data: Decoded front-matter mapping.

    Returns:
        Metadata with known keys converted and the rest kept in ``extra``.

    Raises:
        ParseError: If a known key holds a value of the wrong type.
    """
    return Metadata(
        title=_as_text(data, "title") or "",
        description=_as_text(data, "desc") or "",
        date=_as_datetime(data.get("date")),
        published=_as_bool(data.get("status")),
        css=_as_text(data, "css") or None,
        js=_as_text(data, "js") or None,
        extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
    )


def _as_text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    raise ParseError(
        f"Front-matter field {key!r} must be a string, got {type(value).__name__}"
    )


def _as_bool(value: Any) -> bool:
    """Interpret the ``status`` field.

    Examples:
        >>> _as_bool(True)
        True

        >>> _as_bool("yes")
        True

        >>> _as_bool(None)
        False
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ParseError(f"Front-matter field 'status' must be a boolean, got {value!r}")


def _as_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ParseError(f"Front-matter field 'date' is not a date: {value!r}") from exc
    raise ParseError(
        f"Front-matter field 'date' must be a date, got {type(value).__name__}"
    )
