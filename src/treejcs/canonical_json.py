"""
canonical_json.py — tree-jcs convenience API
Deterministic JSON canonicalization for signing and content-addressed hashing.

Canonical form (reference: RFC 8785):
- UTF-8 encoding
- Object members sorted by the UTF-16 code units of their keys
- No insignificant whitespace
- Numbers: arbitrary-precision decimals; exponential form outside
  [1e-21, 1e21), otherwise plain with at most 7 fractional digits
- Strings: only control characters, quote and backslash are escaped; lone
  surrogates are rejected (InvalidStringError)
- No NaN/Infinity (raises ValueError)

Every function accepts an optional ``adapter`` (a ``TreeAdapter`` or a
registered adapter name); plain Python values need none.
"""

from __future__ import annotations
import hashlib
import io
import json
from decimal import Decimal
from typing import Any, NoReturn, Union

from .equality import canonical_equals
from .generator import CanonicalGenerator, TextSink
from .registry import resolve_adapter

__all__ = [
    "canonicalize",
    "canonical_dumps",
    "canonical_bytes",
    "canonical_hash",
    "canonical_equals",
    "sha256_hex",
    "parse_json",
]


def canonicalize(obj: Any, sink: TextSink, adapter: Any = None) -> None:
    """Stream the canonical JSON text of ``obj`` into ``sink``."""
    CanonicalGenerator(sink, resolve_adapter(adapter)).generate(obj)


def canonical_dumps(obj: Any, adapter: Any = None) -> str:
    """Return canonical JSON string with sorted keys and no whitespace."""
    buffer = io.StringIO()
    canonicalize(obj, buffer, adapter)
    return buffer.getvalue()


def canonical_bytes(obj: Any, adapter: Any = None) -> bytes:
    """Return canonical JSON as UTF-8 bytes."""
    return canonical_dumps(obj, adapter).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return lowercase hex SHA-256 digest."""
    return hashlib.sha256(data).hexdigest()


def canonical_hash(obj: Any, adapter: Any = None) -> str:
    """Return SHA-256 hex digest of canonical JSON bytes."""
    return sha256_hex(canonical_bytes(obj, adapter))


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not a valid JSON number")


def _parse_int(literal: str) -> Union[int, Decimal]:
    try:
        return int(literal)
    except ValueError:
        # longer than the interpreter's int string conversion limit
        return Decimal(literal)


def parse_json(text: Union[str, bytes]) -> Any:
    """Parse JSON text into native values without losing numeric precision.

    Fractional and exponent numbers become ``Decimal``. Integers stay
    ``int`` unless they exceed the interpreter's integer string conversion
    limit, in which case they become ``Decimal`` too. ``NaN``, ``Infinity``
    and ``-Infinity`` are rejected.
    """
    return json.loads(
        text,
        parse_float=Decimal,
        parse_int=_parse_int,
        parse_constant=_reject_constant,
    )
