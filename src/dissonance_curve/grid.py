"""Bounded-denominator rational sampling grid.

The grid holds every rational in ``[start, end]`` whose reduced denominator
does not exceed ``max_denominator``, plus ``start`` and ``end`` themselves.
Sampling therefore concentrates around simple ratios, where dissonance
curves have their characteristic minima.

Enumeration walks the Stern-Brocot tree between each pair of consecutive
integers spanning the range. Each node is a pair of Farey neighbours
``a/b < c/d`` whose mediant ``(a+c)/(b+d)`` is already in lowest terms;
subtrees outside the range or beyond the denominator bound are pruned.
"""

from __future__ import annotations

import logging
import math
import numbers
from fractions import Fraction

from .exceptions import InvalidDenominatorError, InvalidRangeError
from .intervals import IntervalInput, to_rational

logger = logging.getLogger(__name__)


def validate_grid_bounds(
    start: Fraction,
    end: Fraction,
    max_denominator: int,
) -> None:
    """Check grid bounds before any computation.

    Raises:
        InvalidDenominatorError: If max_denominator is not an integer >= 1.
        InvalidRangeError: If start is not positive or start > end.
    """
    if (
        isinstance(max_denominator, bool)
        or not isinstance(max_denominator, numbers.Integral)
        or max_denominator < 1
    ):
        raise InvalidDenominatorError(max_denominator)
    if start <= 0:
        raise InvalidRangeError(start, end, f"start should be positive, got {start}")
    if start > end:
        raise InvalidRangeError(start, end)


def _farey_between(
    left: int,
    start: Fraction,
    end: Fraction,
    max_denominator: int,
) -> list[Fraction]:
    """Mediants between ``left/1`` and ``(left+1)/1`` that fall in range."""
    found = []
    s_num, s_den = start.numerator, start.denominator
    e_num, e_den = end.numerator, end.denominator

    # (a, b, c, d) stands for the neighbour pair a/b < c/d
    stack = [(left, 1, left + 1, 1)]
    while stack:
        a, b, c, d = stack.pop()
        q = b + d
        if q > max_denominator:
            continue
        # whole subtree lies in the open interval (a/b, c/d)
        if c * s_den <= s_num * d or a * e_den >= e_num * b:
            continue

        p = a + c
        if s_num * q <= p * s_den and p * e_den <= e_num * q:
            found.append(Fraction(p, q))
        stack.append((a, b, p, q))
        stack.append((p, q, c, d))
    return found


def rational_grid(
    start: IntervalInput,
    end: IntervalInput,
    max_denominator: int,
) -> list[Fraction]:
    """Enumerate the sampling grid.

    Args:
        start: Lower bound of the range (positive).
        end: Upper bound of the range.
        max_denominator: Largest reduced denominator to include.

    Returns:
        Strictly increasing list of Fractions, including start and end.

    Raises:
        InvalidDenominatorError: If max_denominator is not an integer >= 1.
        InvalidRangeError: If start is not positive or start > end.
        IntervalParseError: If a bound cannot be parsed.

    Example:
        >>> [str(r) for r in rational_grid(1, 2, 3)]
        ['1', '4/3', '3/2', '5/3', '2']
    """
    start = to_rational(start)
    end = to_rational(end)
    validate_grid_bounds(start, end, max_denominator)

    low = math.floor(start)
    high = math.ceil(end)

    found = {start, end}
    found.update(Fraction(k) for k in range(low, high + 1) if start <= k <= end)
    for k in range(low, high):
        found.update(_farey_between(k, start, end, max_denominator))

    grid = sorted(found)
    logger.debug(
        "Rational grid [%s, %s] max_denominator=%d: %d points",
        start,
        end,
        max_denominator,
        len(grid),
    )
    return grid
