"""Sensory dissonance model.

Pairwise dissonance follows the Plomp-Levelt curve as parameterised by
Sethares, weighted by the smaller loudness of the two partials, with an
optional second-order-beating extension. Aggregates sum the pairwise
contributions within and across spectra.

All pairwise evaluation is vectorised: :func:`plomp_levelt_dissonance`
accepts scalars or broadcastable arrays, so a whole spectrum pair is
evaluated in a single call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

import numpy as np

from .config import DEFAULT_DISSONANCE_PARAMS, DissonanceParams
from .loudness import loudness, loudness_array
from .spectrum import Partial, PartialLike, as_partial, as_spectrum, spectrum_arrays

ArrayLike = Union[float, np.ndarray]


def _bump(
    min_loudness: np.ndarray,
    scale: np.ndarray,
    difference: np.ndarray,
    params: DissonanceParams,
) -> np.ndarray:
    return min_loudness * (
        np.exp(-params.b1 * scale * difference) - np.exp(-params.b2 * scale * difference)
    )


def plomp_levelt_dissonance(
    freq1: ArrayLike,
    freq2: ArrayLike,
    loudness1: ArrayLike,
    loudness2: ArrayLike,
    params: DissonanceParams | None = None,
) -> ArrayLike:
    """Dissonance between partials given by frequency and loudness.

    Pairs with equal frequencies, non-positive minimum loudness or
    non-positive minimum frequency contribute zero.

    Args:
        freq1: Frequencies of the first partials in Hz.
        freq2: Frequencies of the second partials in Hz.
        loudness1: Loudness of the first partials in sones.
        loudness2: Loudness of the second partials in sones.
        params: Model parameters. Uses Sethares' defaults if None.

    Returns:
        Dissonance per pair. A float when all inputs are scalars, otherwise
        an array of the broadcast shape.
    """
    params = params or DEFAULT_DISSONANCE_PARAMS

    f1 = np.asarray(freq1, dtype=np.float64)
    f2 = np.asarray(freq2, dtype=np.float64)
    l1 = np.asarray(loudness1, dtype=np.float64)
    l2 = np.asarray(loudness2, dtype=np.float64)

    min_loudness = np.minimum(l1, l2)
    min_freq = np.minimum(f1, f2)
    max_freq = np.maximum(f1, f2)
    difference = np.abs(f1 - f2)

    active = (f1 != f2) & (min_loudness > 0) & (min_freq > 0)

    # Inactive pairs may divide by zero or overflow; they are masked below.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore", under="ignore"):
        scale = params.x_star / (params.s1 * min_freq + params.s2)
        result = params.total_contribution * _bump(min_loudness, scale, difference, params)

        beating = params.second_order_beating
        if beating.enabled:
            beats = np.zeros_like(result)
            for term in beating.terms:
                if term.ratio == 1 or term.ratio <= 0:
                    continue
                width = 1 - beating.width_magnitude_relationship * term.magnitude
                if width <= 0:
                    continue
                beat_difference = np.abs(min_freq * term.ratio - max_freq) / width
                beats = beats + term.magnitude * _bump(
                    min_loudness, scale, beat_difference, params
                )
            result = result + beating.total_contribution * beats

    result = np.where(active, result, 0.0)
    if result.ndim == 0:
        return float(result)
    return result


def dissonance(
    partial1: PartialLike,
    partial2: PartialLike,
    params: DissonanceParams | None = None,
) -> float:
    """Dissonance between two partials.

    Args:
        partial1: First partial.
        partial2: Second partial.
        params: Model parameters. Uses Sethares' defaults if None.

    Returns:
        Non-negative dissonance, symmetric in its two arguments.
    """
    p1: Partial = as_partial(partial1)
    p2: Partial = as_partial(partial2)
    return float(
        plomp_levelt_dissonance(
            p1.frequency,
            p2.frequency,
            loudness(p1.amplitude),
            loudness(p2.amplitude),
            params,
        )
    )


def intrinsic_dissonance(
    spectrum: Iterable[PartialLike],
    params: DissonanceParams | None = None,
) -> float:
    """Sum of dissonance over all unordered pairs of partials in a spectrum."""
    partials = as_spectrum(spectrum)
    if len(partials) < 2:
        return 0.0

    freqs, amps = spectrum_arrays(partials)
    levels = loudness_array(amps)
    i, j = np.triu_indices(len(partials), k=1)
    return float(
        np.sum(plomp_levelt_dissonance(freqs[i], freqs[j], levels[i], levels[j], params))
    )


def cross_dissonance(
    spectrum1: Iterable[PartialLike],
    spectrum2: Iterable[PartialLike],
    params: DissonanceParams | None = None,
) -> float:
    """Sum of dissonance over every partial of one spectrum against every
    partial of the other."""
    partials1 = as_spectrum(spectrum1)
    partials2 = as_spectrum(spectrum2)
    if not partials1 or not partials2:
        return 0.0

    freqs1, amps1 = spectrum_arrays(partials1)
    freqs2, amps2 = spectrum_arrays(partials2)
    levels1 = loudness_array(amps1)
    levels2 = loudness_array(amps2)
    return float(
        np.sum(
            plomp_levelt_dissonance(
                freqs1[:, np.newaxis],
                freqs2[np.newaxis, :],
                levels1[:, np.newaxis],
                levels2[np.newaxis, :],
                params,
            )
        )
    )


def total_dissonance(
    spectrum1: Iterable[PartialLike],
    spectrum2: Iterable[PartialLike],
    params: DissonanceParams | None = None,
) -> float:
    """Sethares dissonance of two spectra sounded together.

    Args:
        spectrum1: First spectrum.
        spectrum2: Second spectrum.
        params: Model parameters. Uses Sethares' defaults if None.

    Returns:
        Intrinsic dissonance of both spectra plus their cross dissonance.
    """
    partials1 = as_spectrum(spectrum1)
    partials2 = as_spectrum(spectrum2)
    return (
        intrinsic_dissonance(partials1, params)
        + intrinsic_dissonance(partials2, params)
        + cross_dissonance(partials1, partials2, params)
    )
