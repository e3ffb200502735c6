"""
ordering.py — Canonical member ordering

Map members are sorted by the UTF-16 code units of their keys. Comparing
the UTF-16-BE encodings bytewise gives exactly that order; it differs from
Python's code-point order for astral characters versus U+E000..U+FFFF.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Tuple

from .errors import MalformedTreeError


def utf16_sort_key(key: str) -> bytes:
    """Return the sort key placing ``key`` in UTF-16 code-unit order."""
    return key.encode("utf-16-be", "surrogatepass")


def sorted_entries(entries: Iterable[Any]) -> List[Tuple[str, Any]]:
    """Materialize map entries and sort them by key.

    Raises:
        MalformedTreeError: If an entry is not a ``(key, node)`` pair or a
            key is not a string.
    """
    materialized: List[Tuple[str, Any]] = []
    for entry in entries:
        try:
            key, node = entry
        except (TypeError, ValueError):
            raise MalformedTreeError(f"map entry {entry!r} is not a (key, node) pair") from None
        if not isinstance(key, str):
            raise MalformedTreeError(f"map key {key!r} is not a string")
        materialized.append((key, node))

    materialized.sort(key=lambda item: utf16_sort_key(item[0]))
    return materialized
