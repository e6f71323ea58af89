"""Tests for the conversion CLI."""

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cli.convert import cli


@pytest.fixture
def run(tables_path):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--tables", str(tables_path), *args])

    return _run


class TestConvertCli:
    """Test CLI commands against the sample tables."""

    def test_tanks(self, run):
        result = run("tanks")
        assert result.exit_code == 0
        assert "41 ～ 43" in result.output
        assert "5,000 L" in result.output
        assert "max reading    14 mm" in result.output

    def test_tanks_reports_empty_table(self, run):
        result = run("tanks")
        assert "Calibration table for tank 90 is empty" in result.output

    def test_reading(self, run):
        result = run("reading", "1", "12")
        assert result.exit_code == 0
        assert result.output.strip() == "4600 L"

    def test_reading_rounded(self, run):
        result = run("reading", "1", "3")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["4950 L", "Rounded 3mm → 4mm"]

    def test_volume_nearest(self, run):
        result = run("volume", "1", "4979")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["2 mm", "No exact match; nearest volume is 4980 L"]

    def test_out_of_range(self, run):
        result = run("reading", "1", "100")
        assert result.exit_code == 1
        assert "max reading: 14 mm" in result.output

    def test_invalid_value(self, run):
        result = run("volume", "1", "lots")
        assert result.exit_code == 1
        assert "Enter a whole number" in result.output

    def test_oversized_value(self, run):
        result = run("reading", "1", "9" * 5000)
        assert result.exit_code == 1
        assert "Enter a whole number" in result.output

    def test_missing_tables_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["--tables", str(tmp_path / "nope.json"), "tanks"])
        assert result.exit_code != 0
