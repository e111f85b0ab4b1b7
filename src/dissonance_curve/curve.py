"""Dissonance curve construction and lookup.

A :class:`DissonanceCurve` transposes the complement spectrum across a
bounded-denominator rational grid, evaluates the total dissonance of the two
spectra at every grid interval and serves exact and nearest-point lookups
over the resulting ascending points.

Example:
    >>> from dissonance_curve import DissonanceCurve, harmonic_spectrum
    >>> tone = harmonic_spectrum(6, 440)
    >>> curve = DissonanceCurve(tone, tone, start=1, end=2, max_denominator=60)
    >>> curve.find_nearest_point("3/2").interval
    Fraction(3, 2)
"""

from __future__ import annotations

import bisect
import logging
import math
import threading
import time
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

import numpy as np

from .config import (
    DEFAULT_END,
    DEFAULT_MAX_DENOMINATOR,
    DEFAULT_START,
    DissonanceParams,
    resolve_params,
)
from .exceptions import IntervalParseError
from .grid import rational_grid
from .intervals import IntervalInput, format_interval, parse_interval, to_rational
from .model import cross_dissonance, intrinsic_dissonance
from .spectrum import PartialLike, Spectrum, as_spectrum, ratio_to_cents, transpose

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Types
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CurvePoint:
    """A sampled point of a dissonance curve.

    Attributes:
        interval: Exact frequency ratio of complement to context.
        dissonance: Total sensory dissonance at that interval.
    """

    interval: Fraction
    dissonance: float

    @property
    def cents(self) -> float:
        """Interval size in cents."""
        return ratio_to_cents(self.interval)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "interval": {
                "n": self.interval.numerator,
                "d": self.interval.denominator,
            },
            "dissonance": self.dissonance,
        }


@dataclass(frozen=True)
class CurveSettings:
    """Inputs a curve is computed from.

    Attributes:
        context: Spectrum held fixed.
        complement: Spectrum transposed across the grid.
        start: Smallest interval of the grid.
        end: Largest interval of the grid.
        max_denominator: Largest reduced denominator sampled.
        params: Resolved dissonance model parameters.
    """

    context: Spectrum
    complement: Spectrum
    start: Fraction = DEFAULT_START
    end: Fraction = DEFAULT_END
    max_denominator: int = DEFAULT_MAX_DENOMINATOR
    params: DissonanceParams = field(default_factory=DissonanceParams)


@dataclass(frozen=True)
class _CurveState:
    """Immutable snapshot of settings, computed points and lookup structures."""

    settings: CurveSettings
    points: tuple[CurvePoint, ...]
    intervals: list[Fraction]
    values: np.ndarray
    by_interval: dict[Fraction, CurvePoint]
    max_dissonance: float
    generation: int = 0


def compute_points(settings: CurveSettings) -> tuple[list[CurvePoint], float]:
    """Evaluate dissonance at every grid interval.

    Args:
        settings: Curve inputs.

    Returns:
        Tuple of (ascending points, maximum dissonance).

    Raises:
        ValidationError: If the range or denominator bound is invalid. Raised
            before any point is computed.
    """
    grid = rational_grid(settings.start, settings.end, settings.max_denominator)

    # Context dissonance does not depend on the interval.
    context_dissonance = intrinsic_dissonance(settings.context, settings.params)

    points = []
    max_dissonance = -math.inf
    for interval in grid:
        transposed = transpose(settings.complement, ratio_to_cents(interval))
        value = (
            context_dissonance
            + intrinsic_dissonance(transposed, settings.params)
            + cross_dissonance(settings.context, transposed, settings.params)
        )
        if value > max_dissonance:
            max_dissonance = value
        points.append(CurvePoint(interval=interval, dissonance=value))

    if not points:
        max_dissonance = 0.0
    return points, max_dissonance


def _build_state(settings: CurveSettings, generation: int = 0) -> _CurveState:
    started = time.perf_counter()
    points, max_dissonance = compute_points(settings)
    state = _CurveState(
        settings=settings,
        points=tuple(points),
        intervals=[p.interval for p in points],
        values=np.array([float(p.interval) for p in points], dtype=np.float64),
        by_interval={p.interval: p for p in points},
        max_dissonance=max_dissonance,
        generation=generation,
    )
    logger.debug(
        "Computed %d curve points over [%s, %s] in %.1f ms (max dissonance %.4f)",
        len(points),
        settings.start,
        settings.end,
        (time.perf_counter() - started) * 1000,
        max_dissonance,
    )
    return state


# -----------------------------------------------------------------------------
# Curve
# -----------------------------------------------------------------------------


class DissonanceCurve:
    """Sensory dissonance of two spectra as a function of interval.

    Points are computed eagerly on construction. The curve is read-only
    apart from :meth:`recalculate`, which rebuilds it in place and bumps
    :attr:`generation`.

    Args:
        context: Spectrum held fixed.
        complement: Spectrum transposed across the grid.
        start: Smallest interval (default 1).
        end: Largest interval (default 2).
        max_denominator: Largest reduced denominator sampled (default 60).
        params: Complete parameters or a mapping of overrides.
        **param_overrides: Individual parameter overrides such as ``b1`` or
            ``second_order_beating``.

    Raises:
        InvalidRangeError: If start > end or start is not positive.
        InvalidDenominatorError: If max_denominator < 1.
        InvalidParamsError: If an override names an unknown parameter.
    """

    def __init__(
        self,
        context: Iterable[PartialLike],
        complement: Iterable[PartialLike],
        *,
        start: IntervalInput = DEFAULT_START,
        end: IntervalInput = DEFAULT_END,
        max_denominator: int = DEFAULT_MAX_DENOMINATOR,
        params: DissonanceParams | Mapping[str, Any] | None = None,
        **param_overrides: Any,
    ) -> None:
        self._lock = threading.Lock()
        settings = CurveSettings(
            context=as_spectrum(context),
            complement=as_spectrum(complement),
            start=to_rational(start),
            end=to_rational(end),
            max_denominator=max_denominator,
            params=resolve_params(params, param_overrides),
        )
        self._state = _build_state(settings)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def points(self) -> tuple[CurvePoint, ...]:
        """Points in ascending interval order."""
        return self._state.points

    @property
    def max_dissonance(self) -> float:
        """Largest dissonance over all points."""
        return self._state.max_dissonance

    @property
    def generation(self) -> int:
        """Number of completed recalculations."""
        return self._state.generation

    @property
    def settings(self) -> CurveSettings:
        return self._state.settings

    @property
    def context(self) -> Spectrum:
        return self._state.settings.context

    @property
    def complement(self) -> Spectrum:
        return self._state.settings.complement

    @property
    def start(self) -> Fraction:
        return self._state.settings.start

    @property
    def end(self) -> Fraction:
        return self._state.settings.end

    @property
    def max_denominator(self) -> int:
        return self._state.settings.max_denominator

    @property
    def params(self) -> DissonanceParams:
        return self._state.settings.params

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _lower_bound(self, state: _CurveState, query: Fraction | float) -> int:
        if isinstance(query, Fraction):
            return bisect.bisect_left(state.intervals, query)
        return int(np.searchsorted(state.values, query, side="left"))

    def get(self, interval: IntervalInput) -> CurvePoint | None:
        """Look up the point at exactly the given interval.

        Float queries match a point whose interval rounds to that float.

        Args:
            interval: Exact rational, textual fraction or float.

        Returns:
            The matching point, or None if the interval was not sampled.

        Raises:
            IntervalParseError: If the query is malformed.
        """
        state = self._state
        query = parse_interval(interval)
        if isinstance(query, Fraction):
            return state.by_interval.get(query)

        index = self._lower_bound(state, query)
        if index < len(state.points) and state.values[index] == query:
            return state.points[index]
        return None

    def find_nearest_point(self, query: IntervalInput) -> CurvePoint | None:
        """Find the first point whose interval is >= the query.

        Queries below the first point return the first point and queries
        above the last point return the last one. A query between two
        points returns the higher neighbour.

        Args:
            query: Exact rational, textual fraction or float.

        Returns:
            The ceiling point, clamped to the curve range. None only for a
            curve without points.

        Raises:
            IntervalParseError: If the query is malformed.
        """
        state = self._state
        parsed = parse_interval(query)
        if not state.points:
            return None

        index = self._lower_bound(state, parsed)
        if index >= len(state.points):
            return state.points[-1]
        return state.points[index]

    def __len__(self) -> int:
        return len(self._state.points)

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self._state.points)

    def __contains__(self, interval: object) -> bool:
        try:
            return self.get(interval) is not None  # type: ignore[arg-type]
        except IntervalParseError:
            return False

    # -------------------------------------------------------------------------
    # Recalculation
    # -------------------------------------------------------------------------

    def recalculate(
        self,
        *,
        context: Iterable[PartialLike] | None = None,
        complement: Iterable[PartialLike] | None = None,
        start: IntervalInput | None = None,
        end: IntervalInput | None = None,
        max_denominator: int | None = None,
        params: DissonanceParams | Mapping[str, Any] | None = None,
        **param_overrides: Any,
    ) -> DissonanceCurve:
        """Rebuild the curve in place with new options.

        Options that are not given keep their current values. Parameter
        mappings and overrides are layered on top of the current parameters.
        The previous points stay in place if validation fails.

        Returns:
            This curve, for chaining.

        Raises:
            ValidationError: If the new options are invalid.
        """
        with self._lock:
            current = self._state.settings
            if params is None and not param_overrides:
                new_params = current.params
            elif isinstance(params, DissonanceParams):
                new_params = resolve_params(params, param_overrides)
            else:
                new_params = resolve_params(
                    resolve_params(current.params, params), param_overrides
                )

            settings = CurveSettings(
                context=current.context if context is None else as_spectrum(context),
                complement=(
                    current.complement if complement is None else as_spectrum(complement)
                ),
                start=current.start if start is None else to_rational(start),
                end=current.end if end is None else to_rational(end),
                max_denominator=(
                    current.max_denominator if max_denominator is None else max_denominator
                ),
                params=new_params,
            )
            state = _build_state(settings, self._state.generation + 1)

            self._state = state
            logger.debug("Recalculated curve, generation %d", state.generation)
        return self

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_records(self) -> list[dict[str, Any]]:
        """Points as serialisable ``{interval: {n, d}, dissonance}`` records."""
        return [p.to_dict() for p in self._state.points]

    def to_file_string(self) -> str:
        """Points as tab-separated text with a header row."""
        from .export import curve_to_tsv

        return curve_to_tsv(self)

    def to_file_bytes(self) -> bytes:
        """Tab-separated export encoded as UTF-8."""
        return self.to_file_string().encode("utf-8")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(start={format_interval(self.start)}, "
            f"end={format_interval(self.end)}, max_denominator={self.max_denominator}, "
            f"points={len(self)}, generation={self.generation})"
        )
