"""Sensory dissonance curves for pairs of spectra.

This package evaluates Sethares' psychoacoustic dissonance model as one
spectrum is transposed across a range of musical intervals relative to
another:
- Loudness: amplitude to sone conversion
- Model: Plomp-Levelt pairwise dissonance with optional second-order beating
- Grid: bounded-denominator rational sampling of the interval range
- Curve: sampled points with exact and nearest-point lookup

Example:
    >>> from dissonance_curve import DissonanceCurve, harmonic_spectrum
    >>> tone = harmonic_spectrum(6, 440)
    >>> curve = DissonanceCurve(tone, tone, start=1, end=2, max_denominator=60)
    >>> point = curve.find_nearest_point("3/2")
    >>> print(f"{point.interval}: {point.dissonance:.3f}")
"""

from .config import (
    DEFAULT_DISSONANCE_PARAMS,
    DEFAULT_END,
    DEFAULT_MAX_DENOMINATOR,
    DEFAULT_START,
    SECOND_ORDER_BEATING_PARAMS,
    SETHARES_DISSONANCE_PARAMS,
    DissonanceParams,
    SecondOrderBeatingParams,
    SecondOrderBeatingTerm,
    resolve_params,
)
from .curve import CurvePoint, CurveSettings, DissonanceCurve
from .exceptions import (
    DissonanceCurveError,
    IntervalParseError,
    InvalidDenominatorError,
    InvalidParamsError,
    InvalidRangeError,
    ValidationError,
)
from .export import curve_to_dict, curve_to_tsv, write_tsv
from .grid import rational_grid
from .intervals import format_interval, parse_interval, to_rational
from .loudness import loudness, loudness_array
from .model import (
    cross_dissonance,
    dissonance,
    intrinsic_dissonance,
    plomp_levelt_dissonance,
    total_dissonance,
)
from .spectrum import (
    Partial,
    Spectrum,
    as_spectrum,
    cents_to_ratio,
    harmonic_spectrum,
    ratio_to_cents,
    transpose,
)

__all__ = [
    # Curve
    "DissonanceCurve",
    "CurvePoint",
    "CurveSettings",
    # Config
    "DissonanceParams",
    "SecondOrderBeatingParams",
    "SecondOrderBeatingTerm",
    "SETHARES_DISSONANCE_PARAMS",
    "SECOND_ORDER_BEATING_PARAMS",
    "DEFAULT_DISSONANCE_PARAMS",
    "DEFAULT_START",
    "DEFAULT_END",
    "DEFAULT_MAX_DENOMINATOR",
    "resolve_params",
    # Model
    "loudness",
    "loudness_array",
    "dissonance",
    "plomp_levelt_dissonance",
    "intrinsic_dissonance",
    "cross_dissonance",
    "total_dissonance",
    # Spectra
    "Partial",
    "Spectrum",
    "as_spectrum",
    "harmonic_spectrum",
    "transpose",
    "ratio_to_cents",
    "cents_to_ratio",
    # Intervals
    "rational_grid",
    "parse_interval",
    "to_rational",
    "format_interval",
    # Export
    "curve_to_tsv",
    "curve_to_dict",
    "write_tsv",
    # Exceptions
    "DissonanceCurveError",
    "ValidationError",
    "InvalidRangeError",
    "InvalidDenominatorError",
    "IntervalParseError",
    "InvalidParamsError",
]
