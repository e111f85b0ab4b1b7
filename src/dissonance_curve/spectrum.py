"""Spectrum primitives and transposition."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from .exceptions import ValidationError


@dataclass(frozen=True)
class Partial:
    """A single sinusoidal component of a sound.

    Attributes:
        frequency: Frequency in Hz.
        amplitude: Normalised peak amplitude.
        phase: Phase in radians. Carried along but unused by the model.
    """

    frequency: float
    amplitude: float
    phase: float | None = None


Spectrum = tuple[Partial, ...]
PartialLike = Union[Partial, Sequence[float], Mapping[str, Any]]


def as_partial(value: PartialLike) -> Partial:
    """Normalise a partial given as a Partial, pair or mapping.

    Mappings may use ``frequency`` or ``freq`` for the frequency.
    """
    if isinstance(value, Partial):
        return value
    if isinstance(value, Mapping):
        frequency = value["frequency"] if "frequency" in value else value["freq"]
        return Partial(
            frequency=float(frequency),
            amplitude=float(value["amplitude"]),
            phase=value.get("phase"),
        )
    if len(value) == 3:
        frequency, amplitude, phase = value
        return Partial(
            float(frequency), float(amplitude), None if phase is None else float(phase)
        )
    frequency, amplitude = value
    return Partial(float(frequency), float(amplitude))


def as_spectrum(partials: Iterable[PartialLike]) -> Spectrum:
    """Normalise an iterable of partial-like values to a Spectrum."""
    return tuple(as_partial(p) for p in partials)


def spectrum_arrays(spectrum: Spectrum) -> tuple[np.ndarray, np.ndarray]:
    """Split a spectrum into frequency and amplitude arrays."""
    frequencies = np.array([p.frequency for p in spectrum], dtype=np.float64)
    amplitudes = np.array([p.amplitude for p in spectrum], dtype=np.float64)
    return frequencies, amplitudes


def harmonic_spectrum(num_partials: int, fundamental: float) -> Spectrum:
    """Build a harmonic series with amplitudes 1, 1/2, 1/3, ...

    Args:
        num_partials: Number of partials including the fundamental.
        fundamental: Fundamental frequency in Hz.

    Returns:
        Spectrum with ``num_partials`` partials.

    Raises:
        ValidationError: If ``num_partials`` is negative.
    """
    if num_partials < 0:
        raise ValidationError(f"num_partials must be >= 0, got {num_partials}")
    return tuple(
        Partial(frequency=fundamental * k, amplitude=1.0 / k)
        for k in range(1, num_partials + 1)
    )


def ratio_to_cents(ratio: float) -> float:
    """Convert a frequency ratio to cents. Non-positive ratios map to 0."""
    return 1200 * math.log2(ratio) if ratio > 0 else 0.0


def cents_to_ratio(cents: float) -> float:
    """Convert cents to a frequency ratio."""
    return 2 ** (cents / 1200)


def transpose(spectrum: Iterable[PartialLike], cents: float) -> Spectrum:
    """Shift every partial of a spectrum by an interval.

    Amplitudes are kept, phases are dropped and the input is not modified.

    Args:
        spectrum: Spectrum to transpose.
        cents: Interval in cents.

    Returns:
        New transposed spectrum.
    """
    ratio = cents_to_ratio(cents)
    return tuple(
        Partial(frequency=p.frequency * ratio, amplitude=p.amplitude)
        for p in as_spectrum(spectrum)
    )
