"""Reader for properties-style key/value files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

_KEY_TERMINATORS = "=: \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(text: str) -> str:
    """Resolve backslash escapes like ``\\=`` or ``\\t``."""
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


def _split_key_value(line: str) -> tuple[str, str]:
    """Split at the first unescaped '=', ':' or whitespace.

    A backslash escapes only the next character, so ``\\\\=`` ends the key.
    """
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _KEY_TERMINATORS:
            break
        i += 1
    else:
        return line, ""

    key, rest = line[:i], line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:]
    return key, rest


def _logical_lines(text: str) -> list[str]:
    """Join lines ending with an odd number of backslashes."""
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip() if pending else raw.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dict.

    Supports ``key=value``, ``key: value`` and ``key value`` forms,
    ``#``/``!`` comments and backslash line continuation.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[_unescape(key)] = _unescape(value.strip())
    return properties


def read_properties(path: Path) -> dict[str, str]:
    """Read a properties file.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError("Error reading container configuration", path, e) from e
    properties = parse_properties(text)
    logger.debug(f"Read {len(properties)} properties from {path}")
    return properties
