"""
numbers.py — Canonical number text

Every JSON number is treated as an arbitrary-precision decimal and
rendered as:

- ``0`` for any zero (negative zero included)
- exponential form ``d[.ddd]e+NN`` when ``|v| >= 1e21``
- exponential form ``d[.ddd]e-NN`` when ``0 < |v| <= 1e-21``
- plain notation with at most 7 fractional digits (half-even rounding,
  trailing zeros dropped) otherwise

All arithmetic runs in a call-local ``decimal`` context, so concurrent
callers never share formatter state.
"""

from __future__ import annotations
from decimal import Context, Decimal, ROUND_HALF_EVEN, localcontext
from typing import Union

from .errors import InvalidNumberError

Number = Union[Decimal, int, float]

EXPONENT_UPPER = Decimal("1e21")
EXPONENT_LOWER = Decimal("1e-21")
MAX_FRACTION_DIGITS = 7

_QUANTUM = Decimal((0, (1,), -MAX_FRACTION_DIGITS))
# 22 integer digits (a value rounding up to 1e21) plus the fraction.
_PLAIN_PRECISION = 22 + MAX_FRACTION_DIGITS


def to_decimal(value: Number) -> Decimal:
    """Convert a JSON number to ``Decimal`` without losing precision.

    Floats go through their shortest ``repr`` so ``0.1`` becomes
    ``Decimal("0.1")`` rather than the exact binary expansion.

    Raises:
        TypeError: If ``value`` is a ``bool`` or not a number.
        InvalidNumberError: If ``value`` is NaN or infinite.
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not JSON numbers")
    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, float):
        dec = Decimal(repr(value))
    else:
        raise TypeError(f"unsupported number type: {type(value).__name__}")

    if not dec.is_finite():
        raise InvalidNumberError(f"value={value!r}")
    return dec


def canonicalize_number(value: Number) -> str:
    """Return the canonical text of a JSON number."""
    dec = to_decimal(value)
    if dec.is_zero():
        return "0"

    magnitude = dec.copy_abs()
    if magnitude >= EXPONENT_UPPER or magnitude <= EXPONENT_LOWER:
        return _exponential(dec)
    return _plain(dec)


def _exponential(dec: Decimal) -> str:
    sign, digits, _ = dec.as_tuple()
    significant = "".join(str(d) for d in digits).rstrip("0")
    mantissa = significant[0]
    if len(significant) > 1:
        mantissa += "." + significant[1:]

    adjusted = dec.adjusted()
    exp_sign = "+" if adjusted >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(adjusted):02d}"


def _plain(dec: Decimal) -> str:
    with localcontext(Context(prec=_PLAIN_PRECISION, rounding=ROUND_HALF_EVEN)):
        rounded = dec.quantize(_QUANTUM)

    if rounded.is_zero():
        return "0"
    if rounded.copy_abs() >= EXPONENT_UPPER:
        # 999...9.99999999 rounds up across the exponential threshold
        return _exponential(rounded)

    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
