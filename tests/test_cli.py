"""Tests for the command line interface."""

from pathlib import Path

import yaml
from typer.testing import CliRunner

from tabletop_league.cli import app

EXAMPLE_LEAGUE = Path(__file__).parent.parent / "examples" / "league.yaml"

runner = CliRunner()


def _write_league(tmp_path, **overrides):
    data = yaml.safe_load(EXAMPLE_LEAGUE.read_text())
    data.update(overrides)
    path = tmp_path / "league.yaml"
    path.write_text(yaml.dump(data))
    return path


class TestStandingsCommand:
    """Tests for the standings command."""

    def test_prints_table(self):
        """Test standings are printed with the leader first."""
        result = runner.invoke(app, ["standings", str(EXAMPLE_LEAGUE)])
        assert result.exit_code == 0
        assert "Alice" in result.output
        assert result.output.index("Alice") < result.output.index("Bram")
        assert "Tiebreak: sos" in result.output

    def test_cut(self):
        """Test the cut limits the table."""
        result = runner.invoke(app, ["standings", str(EXAMPLE_LEAGUE), "--cut", "1"])
        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Bram" not in result.output

    def test_missing_file(self, tmp_path):
        """Test a missing league file exits with an error."""
        result = runner.invoke(app, ["standings", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestPairCommand:
    """Tests for the pair command."""

    def test_pairs_next_round(self):
        """Test the next round is paired, with a BYE for the odd player."""
        result = runner.invoke(app, ["pair", str(EXAMPLE_LEAGUE), "--seed", "7"])
        assert result.exit_code == 0
        assert "Round 2" in result.output
        assert "BYE" in result.output

    def test_unknown_method(self):
        """Test an unknown pairing method is rejected."""
        result = runner.invoke(app, ["pair", str(EXAMPLE_LEAGUE), "--method", "alphabetical"])
        assert result.exit_code == 1
        assert "Unknown pairing method" in result.output

    def test_manual_method_fails(self):
        """Test the manual method cannot generate pairings."""
        result = runner.invoke(app, ["pair", str(EXAMPLE_LEAGUE), "--method", "manual"])
        assert result.exit_code == 1
        assert "Manual pairing" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self):
        """Test the example league validates."""
        result = runner.invoke(app, ["validate", str(EXAMPLE_LEAGUE)])
        assert result.exit_code == 0
        assert "League file is valid!" in result.output

    def test_wrong_recorded_winner(self, tmp_path):
        """Test a recorded winner that disagrees with the scores is reported."""
        data = yaml.safe_load(EXAMPLE_LEAGUE.read_text())
        data["matches"][0]["winner_id"] = "p2"
        path = _write_league(tmp_path, matches=data["matches"])

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "derived winner p1" in result.output

    def test_unknown_game_system(self, tmp_path):
        """Test a match under an unregistered game system is reported."""
        data = yaml.safe_load(EXAMPLE_LEAGUE.read_text())
        data["matches"][1]["game_system_id"] = "bloodbowl"
        path = _write_league(tmp_path, matches=data["matches"])

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Unknown game system 'bloodbowl'" in result.output


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self):
        """Test info shows example commands."""
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "tabletop-league pair" in result.output
