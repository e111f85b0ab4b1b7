"""Text and record export of dissonance curves."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from .intervals import format_interval

if TYPE_CHECKING:
    from .curve import DissonanceCurve

TSV_HEADER = ("Interval", "Cents", "Sensory dissonance")


def _row_string(row: list[Any] | tuple[Any, ...], delimiter: str = "\t") -> str:
    return delimiter.join(str(cell) for cell in row)


def curve_to_tsv(curve: DissonanceCurve, delimiter: str = "\t") -> str:
    """Render curve points as delimited text.

    Each row holds the interval as ``n/d``, its size in cents and the
    dissonance. An empty curve renders as an empty string.

    Args:
        curve: Curve to export.
        delimiter: Column delimiter.

    Returns:
        Header row followed by one row per point, newline separated.
    """
    if len(curve) == 0:
        return ""

    lines = [_row_string(TSV_HEADER, delimiter)]
    for point in curve.points:
        lines.append(
            _row_string(
                (format_interval(point.interval), point.cents, point.dissonance),
                delimiter,
            )
        )
    return "\n".join(lines) + "\n"


def curve_to_dict(curve: DissonanceCurve) -> dict[str, Any]:
    """Convert a curve and its settings to a dictionary for serialization."""
    return {
        "start": format_interval(curve.start),
        "end": format_interval(curve.end),
        "max_denominator": curve.max_denominator,
        "max_dissonance": curve.max_dissonance,
        "generation": curve.generation,
        "points": curve.to_records(),
    }


def write_tsv(curve: DissonanceCurve, path: str | Path) -> Path:
    """Write the delimited-text export of a curve to a file.

    Returns:
        The path written to.
    """
    path = Path(path)
    path.write_bytes(curve.to_file_bytes())
    return path
