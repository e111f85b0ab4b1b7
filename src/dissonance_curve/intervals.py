"""Interval values and query canonicalisation.

Intervals are stored as exact :class:`fractions.Fraction` values. Queries may
arrive as exact rationals (``int``, ``Fraction``, ``Decimal``), as textual
fractions (``"3/2"``, ``"1.5"``) or as floats. Exact and textual queries
canonicalise to a Fraction; floats stay floats, since they are inherently
approximate and are compared against the float value of stored intervals.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Union

from .exceptions import IntervalParseError

IntervalInput = Union[int, float, str, Fraction, Decimal]


def parse_interval(value: IntervalInput) -> Fraction | float:
    """Canonicalise an interval query.

    Args:
        value: Exact rational, textual fraction or float.

    Returns:
        A Fraction for exact and textual input, a float for float input.

    Raises:
        IntervalParseError: If the value is malformed, non-finite or of an
            unsupported type.
    """
    if isinstance(value, bool):
        raise IntervalParseError(value)

    if isinstance(value, numbers.Integral):
        return Fraction(int(value))

    if isinstance(value, numbers.Rational):
        return Fraction(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise IntervalParseError(value)
        return Fraction(value)

    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            raise IntervalParseError(value)
        return number

    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except (ValueError, ZeroDivisionError) as e:
            raise IntervalParseError(value) from e

    raise IntervalParseError(value, f"Unsupported interval type: {type(value).__name__}")


def to_rational(value: IntervalInput) -> Fraction:
    """Convert an interval to an exact Fraction.

    Floats are read through their shortest decimal representation, so
    ``1.1`` becomes ``11/10`` rather than the binary expansion of the float.

    Raises:
        IntervalParseError: If the value cannot be parsed.
    """
    parsed = parse_interval(value)
    if isinstance(parsed, float):
        return Fraction(repr(parsed))
    return parsed


def format_interval(interval: Fraction) -> str:
    """Format an interval as ``n/d``, or ``n`` for whole numbers."""
    if interval.denominator == 1:
        return str(interval.numerator)
    return f"{interval.numerator}/{interval.denominator}"
