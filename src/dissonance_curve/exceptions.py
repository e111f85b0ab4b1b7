"""Exception classes for dissonance curve computation."""

from __future__ import annotations

from typing import Any


class DissonanceCurveError(Exception):
    """Base exception for dissonance curve errors."""

    pass


class ValidationError(DissonanceCurveError, ValueError):
    """Raised when curve inputs or lookup queries are invalid."""

    pass


class InvalidRangeError(ValidationError):
    """Raised when the interval range of a curve is invalid.

    Attributes:
        start: Lower bound of the requested range.
        end: Upper bound of the requested range.
    """

    def __init__(
        self,
        start: Any,
        end: Any,
        message: str | None = None,
    ) -> None:
        self.start = start
        self.end = end
        if message is None:
            message = (
                f"start ({start}) should be less than or equal to end ({end})"
            )
        super().__init__(message)


class InvalidDenominatorError(ValidationError):
    """Raised when the maximum grid denominator is not a positive integer.

    Attributes:
        max_denominator: The rejected value.
    """

    def __init__(self, max_denominator: Any, message: str | None = None) -> None:
        self.max_denominator = max_denominator
        if message is None:
            message = (
                f"max_denominator should be an integer >= 1, got {max_denominator!r}"
            )
        super().__init__(message)


class IntervalParseError(ValidationError):
    """Raised when an interval query cannot be interpreted as a ratio.

    Attributes:
        value: The rejected query.
    """

    def __init__(self, value: Any, message: str | None = None) -> None:
        self.value = value
        if message is None:
            message = f"Cannot interpret {value!r} as an interval ratio"
        super().__init__(message)


class InvalidParamsError(ValidationError):
    """Raised when dissonance parameter overrides name unknown fields."""

    pass
