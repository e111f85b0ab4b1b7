"""Shared fixtures for dissonance curve tests."""

import pytest

from dissonance_curve import DissonanceCurve, Spectrum, harmonic_spectrum


@pytest.fixture
def harmonic_tone() -> Spectrum:
    """Six-partial harmonic spectrum at 440 Hz with amplitudes 1, 1/2, ..."""
    return harmonic_spectrum(6, 440)


@pytest.fixture(scope="session")
def default_curve() -> DissonanceCurve:
    """Curve of two 6-partial harmonic tones over one octave.

    Session scoped since building it is the most expensive step in the
    suite; tests must not recalculate it.
    """
    tone = harmonic_spectrum(6, 440)
    return DissonanceCurve(tone, tone, start=1, end=2, max_denominator=60)


@pytest.fixture
def small_curve(harmonic_tone: Spectrum) -> DissonanceCurve:
    """Cheap curve for tests that mutate via recalculate."""
    return DissonanceCurve(harmonic_tone, harmonic_tone, start=1, end=2, max_denominator=6)
