"""String helpers: case conversion, JSON character escaping, version strings."""

from __future__ import annotations

import re
from enum import IntFlag


class JsonOptions(IntFlag):
    """Options that change how JSON text is produced and parsed."""

    NIL = 0
    ESCAPE_SLASHES = 1
    ABORT_ON_ERROR = 2


_JSON_ESCAPES = {
    "": "\\0",
    "\0": "\\0",
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_VERSION_PREFIX = re.compile(r"[0-9.]*")


def _map_chars(text: str, convert) -> str:
    # Only one-to-one mappings are applied, so the text keeps its length.
    return "".join(
        converted if len(converted := convert(c)) == 1 else c for c in text
    )


def to_lower(text: str) -> str:
    """Return the text with every character that has a single lowercase form lowered."""
    return _map_chars(text, str.lower)


def to_upper(text: str) -> str:
    """Return the text with every character that has a single uppercase form raised."""
    return _map_chars(text, str.upper)


def escape_json_char(value: str, options=JsonOptions.NIL) -> str:
    """Return the JSON escape sequence for a single character, or the value unchanged.

    A forward slash is escaped only when ``JsonOptions.ESCAPE_SLASHES`` is set.
    """
    if value in _JSON_ESCAPES:
        return _JSON_ESCAPES[value]
    if value == "/" and int(options) & JsonOptions.ESCAPE_SLASHES:
        return "\\/"
    return value


def version_string(version: str) -> str:
    """Return the numeric part of a version tag such as ``v1.2.3-4-gabcdef``."""
    if version.startswith("v"):
        version = version[1:]
    match = _VERSION_PREFIX.match(version)
    return match.group(0) if match else ""