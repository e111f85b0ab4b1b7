"""Command-line interface for dissonance curves.

Builds a dissonance curve for two harmonic spectra and prints it, or answers
nearest-point queries against it.

Usage:
    dissonance-curve curve --partials 6 --fundamental 440 --max-denominator 60
    dissonance-curve curve --format tsv --output curve.tsv
    dissonance-curve nearest 3/2 1.41 --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import DEFAULT_MAX_DENOMINATOR
from .curve import CurvePoint, DissonanceCurve
from .exceptions import DissonanceCurveError, ValidationError
from .export import curve_to_dict, write_tsv
from .intervals import format_interval
from .spectrum import harmonic_spectrum

# Output format constants
FORMAT_JSON = "json"
FORMAT_TEXT = "text"
FORMAT_TSV = "tsv"


class CLIError(DissonanceCurveError):
    """Base exception for CLI errors."""

    pass


# -----------------------------------------------------------------------------
# Output Formatters
# -----------------------------------------------------------------------------


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a simple text table."""
    if not rows:
        return "(empty)"

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    header_line = "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    lines.append(header_line)
    lines.append("-" * len(header_line))

    for row in rows:
        lines.append("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))

    return "\n".join(lines)


def _point_row(point: CurvePoint) -> list[str]:
    return [
        format_interval(point.interval),
        f"{point.cents:.2f}",
        f"{point.dissonance:.6f}",
    ]


def format_curve_text(curve: DissonanceCurve) -> str:
    """Format a curve as a human-readable table."""
    lines = [
        f"Range: {format_interval(curve.start)} - {format_interval(curve.end)} "
        f"(max denominator {curve.max_denominator})",
        f"Points: {len(curve)}",
        f"Max dissonance: {curve.max_dissonance:.6f}",
        "",
        format_table(
            ["Interval", "Cents", "Dissonance"],
            [_point_row(p) for p in curve.points],
        ),
    ]
    return "\n".join(lines)


def format_nearest_text(results: list[tuple[str, CurvePoint]]) -> str:
    """Format nearest-point query results as a table."""
    rows = [[query] + _point_row(point) for query, point in results]
    return format_table(["Query", "Interval", "Cents", "Dissonance"], rows)


# -----------------------------------------------------------------------------
# Command Handlers
# -----------------------------------------------------------------------------


def build_curve(args: argparse.Namespace) -> DissonanceCurve:
    """Build the curve described by the spectrum and range arguments."""
    complement_partials = (
        args.partials if args.complement_partials is None else args.complement_partials
    )
    complement_fundamental = (
        args.fundamental
        if args.complement_fundamental is None
        else args.complement_fundamental
    )

    context = harmonic_spectrum(args.partials, args.fundamental)
    complement = harmonic_spectrum(complement_partials, complement_fundamental)

    print(
        f"Computing dissonance curve for {args.partials} x {complement_partials} partials...",
        file=sys.stderr,
    )
    return DissonanceCurve(
        context,
        complement,
        start=args.start,
        end=args.end,
        max_denominator=args.max_denominator,
    )


def cmd_curve(args: argparse.Namespace) -> int:
    """Handle curve command."""
    if args.output:
        output_path = Path(args.output)
        if not output_path.parent.exists():
            raise CLIError(f"Output directory not found: {output_path.parent}")

    curve = build_curve(args)

    if args.output:
        write_tsv(curve, args.output)
        print(f"Curve written to {args.output}", file=sys.stderr)
        return 0

    if args.format == FORMAT_JSON:
        print(format_json(curve_to_dict(curve)))
    elif args.format == FORMAT_TSV:
        print(curve.to_file_string(), end="")
    else:  # text
        print(format_curve_text(curve))
    return 0


def cmd_nearest(args: argparse.Namespace) -> int:
    """Handle nearest command."""
    curve = build_curve(args)

    results = []
    for query in args.queries:
        point = curve.find_nearest_point(query)
        if point is None:
            raise CLIError("Curve has no points")
        results.append((query, point))

    if args.format == FORMAT_JSON:
        print(format_json([{"query": q, **p.to_dict()} for q, p in results]))
    else:
        print(format_nearest_text(results))
    return 0


# -----------------------------------------------------------------------------
# Main Entry Point
# -----------------------------------------------------------------------------


def _add_curve_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--partials",
        type=int,
        default=6,
        help="Number of harmonic partials in the context spectrum (default: 6)",
    )
    parser.add_argument(
        "--fundamental",
        type=float,
        default=440.0,
        help="Fundamental of the context spectrum in Hz (default: 440)",
    )
    parser.add_argument(
        "--complement-partials",
        type=int,
        help="Number of partials in the complement spectrum (default: same as context)",
    )
    parser.add_argument(
        "--complement-fundamental",
        type=float,
        help="Fundamental of the complement spectrum in Hz (default: same as context)",
    )
    parser.add_argument(
        "--start",
        type=str,
        default="1",
        help="Smallest interval, e.g. 1 or 9/8 (default: 1)",
    )
    parser.add_argument(
        "--end",
        type=str,
        default="2",
        help="Largest interval, e.g. 2 or 3/1 (default: 2)",
    )
    parser.add_argument(
        "--max-denominator",
        type=int,
        default=DEFAULT_MAX_DENOMINATOR,
        help=f"Largest interval denominator sampled (default: {DEFAULT_MAX_DENOMINATOR})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dissonance-curve",
        description="Sensory dissonance curves for pairs of harmonic spectra",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Print the curve of two 6-partial tones at 440 Hz:
    dissonance-curve curve --partials 6 --fundamental 440

  Export the curve as tab-separated text:
    dissonance-curve curve --max-denominator 100 --output curve.tsv

  Find the sampled intervals nearest to some ratios:
    dissonance-curve nearest 3/2 1.26 5/4 --format json
""",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # curve
    curve_parser = subparsers.add_parser(
        "curve",
        help="Compute and print a dissonance curve",
    )
    _add_curve_arguments(curve_parser)
    curve_parser.add_argument(
        "--format",
        type=str,
        choices=[FORMAT_JSON, FORMAT_TEXT, FORMAT_TSV],
        default=FORMAT_TEXT,
        help="Output format (default: text)",
    )
    curve_parser.add_argument(
        "--output",
        type=str,
        help="Write tab-separated output to this file instead of stdout",
    )

    # nearest
    nearest_parser = subparsers.add_parser(
        "nearest",
        help="Find the curve points nearest to the given intervals",
    )
    nearest_parser.add_argument(
        "queries",
        nargs="+",
        type=str,
        help="Intervals to look up, e.g. 3/2 or 1.5",
    )
    _add_curve_arguments(nearest_parser)
    nearest_parser.add_argument(
        "--format",
        type=str,
        choices=[FORMAT_JSON, FORMAT_TEXT],
        default=FORMAT_TEXT,
        help="Output format (default: text)",
    )

    return parser


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    handlers = {
        "curve": cmd_curve,
        "nearest": cmd_nearest,
    }

    handler = handlers.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    try:
        return handler(args)
    except (CLIError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
