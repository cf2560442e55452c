"""Tests for CLI modules."""

import argparse
import io
import logging
from unittest.mock import patch

import pytest

from margee_lib.cli.main import latlon, main
from margee_lib.core.point import SphericalPoint
from margee_lib.transform.operations import rotate_point


class TestLatLon:
    """Test the LAT,LON argument type."""

    def test_decimal(self):
        """Test decimal degrees."""
        assert latlon("51.5,-0.12") == (51.5, -0.12)

    def test_dms(self):
        """Test DMS with compass directions."""
        lat, lon = latlon("51°28′40″N,0°00′05″W")

        assert lat == pytest.approx(51.477778, abs=1e-6)
        assert lon == pytest.approx(-0.001389, abs=1e-6)

    def test_long_decimals(self):
        """Test decimal coordinates with many places."""
        assert latlon("12.3456789,-33.1234567") == pytest.approx((12.3456789, -33.1234567))

    def test_invalid(self):
        """Test malformed pairs."""
        with pytest.raises(argparse.ArgumentTypeError, match="expected LAT,LON"):
            latlon("51.5")
        with pytest.raises(argparse.ArgumentTypeError):
            latlon("north,east")


class TestMargeeCLI:
    """Test the margee CLI subcommands."""

    def test_rotate(self, capsys):
        """Test a rotation about the north pole."""
        with patch("sys.argv", ["margee", "rotate", "--pole", "90,0", "--angle", "90", "0,0"]):
            main()

        captured = capsys.readouterr()
        assert "-90.000000" in captured.out
        assert "✔ Rotated 1 point(s) by 90.0°" in captured.out

    def test_rotate_dms_points(self, capsys):
        """Test DMS coordinates on the command line."""
        with patch(
            "sys.argv",
            ["margee", "rotate", "--pole", "90°N,0°E", "--angle", "0", "51°28′40″N,0°00′05″W"],
        ):
            main()

        captured = capsys.readouterr()
        assert "51.477778" in captured.out
        assert "-0.001389" in captured.out

    def test_translate_steps(self, capsys):
        """Test a stepped translation prints every frame."""
        with patch(
            "sys.argv",
            [
                "margee",
                "translate",
                "--bearing",
                "90",
                "--distance",
                "100",
                "--steps",
                "2",
                "0,0",
                "1,1",
            ],
        ):
            main()

        captured = capsys.readouterr()
        assert "Frame" in captured.out
        assert "✔ Translated 2 point(s) 100.0 km on bearing 090.0°" in captured.out

    def test_simplify(self, capsys):
        """Test a simplification."""
        with patch("sys.argv", ["margee", "simplify", "0,0", "0,0.5", "0,1"]):
            main()

        captured = capsys.readouterr()
        assert "✔ Simplified 3 point(s) to 2" in captured.out

    def test_euler(self, capsys):
        """Test the Euler pole solver."""
        pole = SphericalPoint(30.0, 40.0)
        starts = [SphericalPoint(10.0, 20.0), SphericalPoint(20.0, 60.0)]
        ends = [rotate_point(p, pole, 25.0) for p in starts]
        args = [f"{p.lat:.10f},{p.lon:.10f}" for p in (starts[0], ends[0], starts[1], ends[1])]

        with patch("sys.argv", ["margee", "euler", *args]):
            main()

        captured = capsys.readouterr()
        assert "Euler pole" in captured.out
        assert "✔ Found both Euler pole solutions" in captured.out

    def test_euler_indeterminate(self, capsys):
        """Test a pair that did not move."""
        with patch("sys.argv", ["margee", "euler", "10,20", "10,20", "20,60", "21,61"]):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "✖" in captured.err
        assert "first pair" in captured.err

    def test_invalid_steps(self, capsys):
        """Test library validation errors exit with code 1."""
        with patch(
            "sys.argv",
            ["margee", "rotate", "--pole", "90,0", "--angle", "10", "--steps", "0", "0,0"],
        ):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "✖ steps must be within" in captured.err

    def test_invalid_coordinate(self):
        """Test argparse rejects malformed coordinates."""
        with patch("sys.argv", ["margee", "simplify", "abc"]):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 2

    def test_argv_argument(self, capsys):
        """Test arguments may be passed directly."""
        main(["simplify", "0,0", "0,1"])

        captured = capsys.readouterr()
        assert "✔ Simplified 2 point(s) to 2" in captured.out

    def test_verbose(self):
        """Test --verbose enables debug logging."""
        with patch("margee_lib.cli.main.logging.basicConfig") as mock_config:
            main(["--verbose", "simplify", "0,0", "0,1"])

        mock_config.assert_called_once()
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG


class TestBatchCLI:
    """Test the batch subcommand."""

    def test_batch_file(self, tmp_path, capsys):
        """Test a batch file applied in sequence."""
        batch = tmp_path / "moves.txt"
        batch.write_text("r 90 0 90\nt 90 0 1 0 10\n", encoding="utf-8")

        with patch("sys.argv", ["margee", "batch", str(batch), "0,0"]):
            main()

        captured = capsys.readouterr()
        assert "Line 1" in captured.out
        assert "Line 2 (0 to 10)" in captured.out
        assert "✔ Applied 2 batch command(s)" in captured.out

    def test_batch_stdin(self, capsys):
        """Test a batch read from stdin."""
        with (
            patch("sys.stdin", io.StringIO("r 90 0 90\n")),
            patch("sys.argv", ["margee", "batch", "-", "0,0"]),
        ):
            main()

        captured = capsys.readouterr()
        assert "-90.000000" in captured.out
        assert "✔ Applied 1 batch command(s)" in captured.out

    def test_batch_missing_file(self, capsys):
        """Test CLI exits when the batch file is missing."""
        with patch("sys.argv", ["margee", "batch", "nonexistent.txt", "0,0"]):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "Batch file not found" in captured.err

    def test_batch_bad_line(self, tmp_path, capsys):
        """Test a malformed line is reported with its number."""
        batch = tmp_path / "bad.txt"
        batch.write_text("r 90 0 90\nr 10 20\n", encoding="utf-8")

        with patch("sys.argv", ["margee", "batch", str(batch), "0,0"]):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "✖ Line 2: fourth argument" in captured.err

    def test_batch_empty(self, tmp_path, capsys):
        """Test an empty batch is an error."""
        batch = tmp_path / "empty.txt"
        batch.write_text("\n", encoding="utf-8")

        with patch("sys.argv", ["margee", "batch", str(batch), "0,0"]):
            with pytest.raises(SystemExit) as excinfo:
                main()

        assert excinfo.value.code == 1
        assert "no commands" in capsys.readouterr().err
