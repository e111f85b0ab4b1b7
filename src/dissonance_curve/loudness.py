"""Amplitude to perceptual loudness conversion.

The conversion to sound pressure level follows Sethares' appendix "How to
Draw Dissonance Curves"; phons are converted to sones with the standard
doubling-per-10-phon law above 40 phon and a power approximation below it.

Amplitudes are normalised peak values: 1.0 corresponds to about 100 dB SPL
(64 sone) and 0.001 to about 40 dB SPL (1 sone), so a harmonic spectrum can
be given directly with amplitudes 1, 1/2, 1/3, ...
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

NORMALISATION_PRESSURE_UNIT = 2.8284271247461905
REFERENCE_PRESSURE = 2e-5

AUDIBILITY_THRESHOLD_PHONS = 8.0
SONE_REFERENCE_PHONS = 40.0
QUIET_REGION_EXPONENT = 2.86
QUIET_REGION_OFFSET = 0.005


def amplitude_to_phons(amplitude: float) -> float:
    """Convert a normalised peak amplitude to loudness level in phons.

    Args:
        amplitude: Normalised peak amplitude.

    Returns:
        Loudness level in phons; ``-inf`` for non-positive amplitudes.
    """
    rms = amplitude / math.sqrt(2)
    pressure = rms * NORMALISATION_PRESSURE_UNIT
    if pressure <= 0:
        return -math.inf
    return 20 * math.log10(pressure / REFERENCE_PRESSURE)


def loudness(amplitude: float) -> float:
    """Convert a normalised peak amplitude to loudness in sones.

    Args:
        amplitude: Normalised peak amplitude.

    Returns:
        Loudness in sones. Zero below the audibility threshold.
    """
    phons = amplitude_to_phons(amplitude)

    if phons < AUDIBILITY_THRESHOLD_PHONS:
        return 0.0
    if phons < SONE_REFERENCE_PHONS:
        return (phons / SONE_REFERENCE_PHONS) ** QUIET_REGION_EXPONENT - QUIET_REGION_OFFSET
    return 2.0 ** ((phons - SONE_REFERENCE_PHONS) / 10)


def loudness_array(amplitudes: Iterable[float]) -> np.ndarray:
    """Convert a sequence of amplitudes to loudness values.

    Args:
        amplitudes: Normalised peak amplitudes.

    Returns:
        Float64 array of loudness values in sones.
    """
    return np.array([loudness(a) for a in amplitudes], dtype=np.float64)
