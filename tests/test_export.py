"""Tests for curve export."""

from fractions import Fraction
from unittest.mock import MagicMock

from dissonance_curve import DissonanceCurve, curve_to_dict, curve_to_tsv, write_tsv
from dissonance_curve.export import TSV_HEADER


class TestCurveToTsv:
    """Tests for delimited-text export."""

    def test_header_and_rows(self, small_curve: DissonanceCurve) -> None:
        """Test one header row plus one row per point."""
        lines = curve_to_tsv(small_curve).splitlines()

        assert lines[0] == "\t".join(TSV_HEADER)
        assert len(lines) == len(small_curve) + 1

    def test_first_row_is_unison(self, small_curve: DissonanceCurve) -> None:
        """Test that unison is written with zero cents."""
        first_row = curve_to_tsv(small_curve).splitlines()[1]
        assert first_row.startswith("1\t0.0\t")

    def test_row_values(self, small_curve: DissonanceCurve) -> None:
        """Test that rows carry interval, cents and dissonance."""
        point = small_curve.get("3/2")
        row = next(
            line.split("\t")
            for line in curve_to_tsv(small_curve).splitlines()
            if line.startswith("3/2\t")
        )

        assert float(row[1]) == point.cents
        assert float(row[2]) == point.dissonance

    def test_trailing_newline(self, small_curve: DissonanceCurve) -> None:
        """Test that the export ends with a newline."""
        assert curve_to_tsv(small_curve).endswith("\n")

    def test_custom_delimiter(self, small_curve: DissonanceCurve) -> None:
        """Test comma-separated output."""
        assert curve_to_tsv(small_curve, delimiter=",").startswith(
            "Interval,Cents,Sensory dissonance\n"
        )

    def test_empty_curve(self) -> None:
        """Test that an empty curve exports as an empty string."""
        curve = MagicMock()
        curve.__len__.return_value = 0

        assert curve_to_tsv(curve) == ""


class TestCurveMethods:
    """Tests for the export methods on the curve."""

    def test_file_string_matches_tsv(self, small_curve: DissonanceCurve) -> None:
        """Test that to_file_string delegates to the TSV export."""
        assert small_curve.to_file_string() == curve_to_tsv(small_curve)

    def test_file_bytes(self, small_curve: DissonanceCurve) -> None:
        """Test UTF-8 encoded export."""
        data = small_curve.to_file_bytes()

        assert isinstance(data, bytes)
        assert data.decode("utf-8") == small_curve.to_file_string()

    def test_records(self, small_curve: DissonanceCurve) -> None:
        """Test serialisable point records."""
        records = small_curve.to_records()

        assert len(records) == len(small_curve)
        fifth = small_curve.get(Fraction(3, 2))
        assert {"interval": {"n": 3, "d": 2}, "dissonance": fifth.dissonance} in records


class TestCurveToDict:
    """Tests for dictionary export."""

    def test_fields(self, small_curve: DissonanceCurve) -> None:
        """Test settings and points in the dictionary."""
        data = curve_to_dict(small_curve)

        assert data["start"] == "1"
        assert data["end"] == "2"
        assert data["max_denominator"] == 6
        assert data["generation"] == 0
        assert data["max_dissonance"] == small_curve.max_dissonance
        assert data["points"] == small_curve.to_records()


class TestWriteTsv:
    """Tests for writing exports to disk."""

    def test_write(self, small_curve: DissonanceCurve, tmp_path) -> None:
        """Test that the file holds the TSV export."""
        path = write_tsv(small_curve, tmp_path / "curve.tsv")

        assert path.exists()
        assert path.read_text(encoding="utf-8") == small_curve.to_file_string()

    def test_accepts_string_path(self, small_curve: DissonanceCurve, tmp_path) -> None:
        """Test that string paths are accepted."""
        path = write_tsv(small_curve, str(tmp_path / "curve.tsv"))
        assert path.name == "curve.tsv"
