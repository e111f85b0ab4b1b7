"""Tests for the command-line interface."""

import json
from fractions import Fraction

import pytest

from dissonance_curve.cli import (
    CLIError,
    build_curve,
    create_parser,
    format_json,
    format_nearest_text,
    format_table,
    main,
)
from dissonance_curve.curve import CurvePoint


def run_cli(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr("sys.argv", ["dissonance-curve", *argv])
    return main()


class TestOutputFormatters:
    """Test output formatting functions."""

    def test_format_json_simple(self) -> None:
        """Test JSON formatting with simple data."""
        data = {"key": "value", "number": 42}
        result = format_json(data)

        assert json.loads(result) == data
        assert '"key": "value"' in result

    def test_format_table_basic(self) -> None:
        """Test table formatting."""
        result = format_table(["Interval", "Cents"], [["3/2", "701.96"], ["2", "1200.00"]])

        assert "Interval" in result
        assert "3/2" in result
        assert "---" in result

    def test_format_table_empty(self) -> None:
        """Test table formatting with empty data."""
        assert format_table(["A", "B"], []) == "(empty)"

    def test_format_nearest_text(self) -> None:
        """Test the nearest-query table."""
        result = format_nearest_text([("1.49", CurvePoint(Fraction(3, 2), 0.125))])

        assert "Query" in result
        assert "1.49" in result
        assert "3/2" in result
        assert "0.125000" in result


class TestArgumentParser:
    """Test CLI argument parsing."""

    def test_parser_creation(self) -> None:
        """Test parser is created successfully."""
        parser = create_parser()
        assert parser.prog == "dissonance-curve"

    def test_curve_defaults(self) -> None:
        """Test default curve arguments."""
        args = create_parser().parse_args(["curve"])

        assert args.command == "curve"
        assert args.partials == 6
        assert args.fundamental == 440.0
        assert args.start == "1"
        assert args.end == "2"
        assert args.max_denominator == 60
        assert args.format == "text"
        assert args.output is None

    def test_curve_options(self) -> None:
        """Test explicit curve arguments."""
        args = create_parser().parse_args(
            [
                "curve",
                "--partials",
                "4",
                "--complement-fundamental",
                "330",
                "--start",
                "9/8",
                "--max-denominator",
                "12",
                "--format",
                "tsv",
            ]
        )

        assert args.partials == 4
        assert args.complement_fundamental == 330.0
        assert args.start == "9/8"
        assert args.max_denominator == 12
        assert args.format == "tsv"

    def test_nearest_queries(self) -> None:
        """Test positional query parsing."""
        args = create_parser().parse_args(["nearest", "3/2", "1.26"])

        assert args.command == "nearest"
        assert args.queries == ["3/2", "1.26"]

    def test_nearest_requires_query(self) -> None:
        """Test that nearest needs at least one query."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["nearest"])

    def test_invalid_format(self) -> None:
        """Test that unknown formats are rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["curve", "--format", "xml"])


class TestBuildCurve:
    """Test curve construction from parsed arguments."""

    def test_complement_defaults_to_context(self) -> None:
        """Test that the complement copies the context when unset."""
        args = create_parser().parse_args(["curve", "--max-denominator", "2"])
        curve = build_curve(args)

        assert curve.complement == curve.context

    def test_explicit_zero_complement_partials(self) -> None:
        """Test that --complement-partials 0 gives an empty complement."""
        args = create_parser().parse_args(
            ["curve", "--max-denominator", "2", "--complement-partials", "0"]
        )
        curve = build_curve(args)

        assert curve.complement == ()
        assert len(curve.context) == 6

    def test_explicit_zero_complement_fundamental(self) -> None:
        """Test that --complement-fundamental 0 is not replaced by the context's."""
        args = create_parser().parse_args(
            ["curve", "--max-denominator", "2", "--complement-fundamental", "0"]
        )
        curve = build_curve(args)

        assert all(p.frequency == 0.0 for p in curve.complement)


class TestMain:
    """Test the main entry point."""

    def test_help(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that --help exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "--help")
        assert exc_info.value.code == 0

    def test_curve_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test JSON curve output."""
        code = run_cli(monkeypatch, "curve", "--max-denominator", "4", "--format", "json")
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert len(data["points"]) == 7
        assert data["points"][0]["interval"] == {"n": 1, "d": 1}
        assert data["points"][3]["interval"] == {"n": 3, "d": 2}
        assert data["max_dissonance"] == max(p["dissonance"] for p in data["points"])

    def test_curve_text(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test text curve output."""
        code = run_cli(monkeypatch, "curve", "--max-denominator", "3")
        out = capsys.readouterr().out

        assert code == 0
        assert "Points: 5" in out
        assert "4/3" in out

    def test_curve_tsv(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test tab-separated curve output."""
        code = run_cli(monkeypatch, "curve", "--max-denominator", "2", "--format", "tsv")
        lines = capsys.readouterr().out.splitlines()

        assert code == 0
        assert lines[0] == "Interval\tCents\tSensory dissonance"
        assert [line.split("\t")[0] for line in lines[1:]] == ["1", "3/2", "2"]

    def test_curve_output_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        """Test writing the curve to a file."""
        output = tmp_path / "curve.tsv"
        code = run_cli(monkeypatch, "curve", "--max-denominator", "2", "--output", str(output))

        assert code == 0
        assert output.read_text(encoding="utf-8").startswith("Interval\t")

    def test_curve_output_missing_directory(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path
    ) -> None:
        """Test that a missing output directory is reported."""
        output = tmp_path / "missing" / "curve.tsv"
        code = run_cli(monkeypatch, "curve", "--output", str(output))

        assert code == 1
        assert "Output directory not found" in capsys.readouterr().err

    def test_invalid_range(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an inverted range is reported as an error."""
        code = run_cli(monkeypatch, "curve", "--start", "2", "--end", "1")

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_nearest_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test nearest-point queries as JSON."""
        code = run_cli(
            monkeypatch, "nearest", "3/2", "1.45", "5", "--max-denominator", "4",
            "--format", "json",
        )
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert [d["query"] for d in data] == ["3/2", "1.45", "5"]
        assert [d["interval"] for d in data] == [
            {"n": 3, "d": 2},
            {"n": 3, "d": 2},
            {"n": 2, "d": 1},
        ]

    def test_nearest_malformed_query(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that malformed queries are reported as errors."""
        code = run_cli(monkeypatch, "nearest", "abc", "--max-denominator", "2")

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_cli_error_is_library_error(self) -> None:
        """Test the CLI error hierarchy."""
        from dissonance_curve import DissonanceCurveError

        assert issubclass(CLIError, DissonanceCurveError)
