"""
Tests for the command-line interface.

Runs the CLI in-process through cli(argv) and checks exit codes and output.
"""

import json

import pytest

from tirelife.cli.main import cli, create_parser


@pytest.fixture
def roster_file(tmp_path, capsys):
    """Write the example roster with make-example and return its path."""
    path = tmp_path / "roster.json"
    assert cli(["make-example", "--output", str(path)]) == 0
    capsys.readouterr()
    return path


@pytest.fixture
def moves_file(tmp_path):
    """Moves that put the spare on slot 2."""
    path = tmp_path / "moves.json"
    path.write_text(json.dumps({"moves": [{"tire_id": "T-007", "target": 2}]}))
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        """Test that running without a command shows help."""
        assert cli([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_summary_date_parsed(self):
        """Test that --date becomes a date."""
        args = create_parser().parse_args(["summary", "--input", "r.json", "--date", "2024-06-30"])

        assert args.date.isoformat() == "2024-06-30"


class TestMakeExample:
    """Tests for make-example."""

    def test_creates_roster(self, roster_file):
        """Test that the example file is a valid roster."""
        data = json.loads(roster_file.read_text())

        assert len(data["tires"]) == 8
        assert data["vehicle"]["vehicle_type"] == "camion_2_ejes"


class TestAnalyze:
    """Tests for analyze."""

    def test_json_output(self, roster_file, capsys):
        """Test that reports go to stdout as JSON."""
        assert cli(["analyze", "--input", str(roster_file)]) == 0

        captured = capsys.readouterr()
        reports = json.loads(captured.out)
        assert len(reports) == 8
        assert reports[5]["status"] == "urgent"
        assert "Analyzing 8 tires" in captured.err

    def test_output_file(self, roster_file, tmp_path, capsys):
        """Test writing reports to a file."""
        output = tmp_path / "reports.json"

        assert cli(["analyze", "--input", str(roster_file), "--output", str(output)]) == 0

        assert len(json.loads(output.read_text())) == 8

    def test_readable(self, roster_file, capsys):
        """Test the table output."""
        assert cli(["analyze", "--input", str(roster_file), "--readable"]) == 0

        out = capsys.readouterr().out
        assert "T-008" in out
        assert "no_inspection" in out

    def test_missing_file(self, tmp_path, capsys):
        """Test that a missing roster exits with 1."""
        assert cli(["analyze", "--input", str(tmp_path / "nope.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        """Test that a malformed roster exits with 1."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        assert cli(["analyze", "--input", str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_invalid_roster(self, tmp_path, capsys):
        """Test that a roster failing validation exits with 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"tires": [{"id": "T1", "initial_depth": 0}]}))

        assert cli(["analyze", "--input", str(path)]) == 1
        assert "Validation Error" in capsys.readouterr().err


class TestSummary:
    """Tests for summary."""

    def test_json_output(self, roster_file, capsys):
        """Test the summary for an explicit reference date."""
        assert cli(["summary", "--input", str(roster_file), "--date", "2024-05-31"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["tire_count"] == 8
        assert data["costs"]["current_month"] == pytest.approx(1_350_000.0)

    def test_readable(self, roster_file, capsys):
        """Test the dashboard output."""
        assert cli(["summary", "--input", str(roster_file), "--date", "2024-05-31", "--readable"]) == 0

        out = capsys.readouterr().out
        assert "Fleet summary: 8 tires, 7 inspected" in out
        assert "T-006" in out


class TestReassign:
    """Tests for reassign."""

    def test_change_set_output(self, roster_file, moves_file, capsys):
        """Test the change-set document on stdout."""
        assert cli(["reassign", "--input", str(roster_file), "--moves", str(moves_file)]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["change_count"] == 2
        assert document["displaced"] == ["T-002"]
        assert document["positions"]["T-002"] is None
        assert document["payload"]["2"] == "T-007"

    def test_commit_to_file(self, roster_file, moves_file, tmp_path, capsys):
        """Test saving the slot map."""
        saved = tmp_path / "saved.json"

        assert cli([
            "reassign", "--input", str(roster_file), "--moves", str(moves_file),
            "--commit-to", str(saved),
        ]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["committed"] is True
        data = json.loads(saved.read_text())
        assert data["plate"] == "ABC123"
        assert data["updates"]["2"] == "T-007"

    def test_output_file_prints_recap(self, roster_file, moves_file, tmp_path, capsys):
        """Test that the readable recap is printed when the JSON goes to a file."""
        output = tmp_path / "changes.json"

        assert cli([
            "reassign", "--input", str(roster_file), "--moves", str(moves_file),
            "--output", str(output),
        ]) == 0

        assert "2 position change(s)" in capsys.readouterr().out
        assert json.loads(output.read_text())["change_count"] == 2

    def test_unwritable_output(self, roster_file, moves_file, tmp_path, capsys):
        """Test that an output path naming a directory exits with 1."""
        assert cli([
            "reassign", "--input", str(roster_file), "--moves", str(moves_file),
            "--output", str(tmp_path),
        ]) == 1

        assert "Error:" in capsys.readouterr().err

    def test_unknown_tire(self, roster_file, tmp_path, capsys):
        """Test that a move for an unknown tire exits with 1."""
        moves = tmp_path / "moves.json"
        moves.write_text(json.dumps([{"tire_id": "T-404", "target": "inventory"}]))

        assert cli(["reassign", "--input", str(roster_file), "--moves", str(moves)]) == 1
        assert "T-404" in capsys.readouterr().err


class TestLayout:
    """Tests for layout."""

    def test_derived_layout(self, capsys):
        """Test printing a derived layout."""
        assert cli(["layout", "--tires", "10"]) == 0

        out = capsys.readouterr().out
        assert "3 axles, 10 slots" in out
        assert "Axle 3" in out

    def test_vehicle_type_layout(self, capsys):
        """Test printing a layout from the vehicle type table."""
        assert cli(["layout", "--tires", "6", "--vehicle-type", "camion_3_ejes"]) == 0

        assert "3 axles, 6 slots" in capsys.readouterr().out

    def test_negative_count(self, capsys):
        """Test that a negative count exits with 1."""
        assert cli(["layout", "--tires", "-1"]) == 1
