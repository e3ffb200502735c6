"""
escaping.py — Canonical string escaping

Only the mandatory JSON escapes are applied: the two-character forms for
backspace, tab, newline, form feed, carriage return, quote and backslash,
and ``\\u00xx`` (lowercase hex) for the remaining C0 controls. Everything
from U+0020 upward, non-ASCII included, is emitted as-is.

Strings holding a surrogate code point (U+D800..U+DFFF) are rejected: the
canonical text is UTF-8 and such a string has no UTF-8 encoding.
"""

from __future__ import annotations
import re
from typing import Dict

from .errors import InvalidStringError

_SHORT_ESCAPES = {
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0C: "\\f",
    0x0D: "\\r",
    0x22: '\\"',
    0x5C: "\\\\",
}

ESCAPE_TABLE: Dict[int, str] = {
    cp: _SHORT_ESCAPES.get(cp, f"\\u{cp:04x}") for cp in range(0x20)
}
ESCAPE_TABLE.update(_SHORT_ESCAPES)

_SURROGATE = re.compile(r"[\ud800-\udfff]")


def check_text(text: str) -> str:
    """Return ``text`` unchanged, or raise if it holds a lone surrogate.

    Raises:
        InvalidStringError: If ``text`` contains a code point in
            U+D800..U+DFFF.
    """
    match = _SURROGATE.search(text)
    if match:
        raise InvalidStringError(
            f"U+{ord(match.group()):04X} at index {match.start()}"
        )
    return text


def escape(text: str) -> str:
    """Escape ``text`` for use between the quotes of a canonical string."""
    return check_text(text).translate(ESCAPE_TABLE)


def quote(text: str) -> str:
    """Return ``text`` escaped and wrapped in double quotes."""
    return '"' + escape(text) + '"'
