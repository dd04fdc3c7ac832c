"""Tests for the command-line interface."""

import pytest

from training_journal.cli import build_parser, get_risk_color, main
from training_journal.config import get_settings


@pytest.fixture
def run(db_path):
    """Run the CLI against the temporary database."""
    def _run(*args):
        return main(["--db", str(db_path), *args])
    return _run


class TestParser:
    def test_date_defaults_to_today(self):
        args = build_parser().parse_args(["risk", "--user", "ana"])
        assert args.date
        assert args.recompute is False

    def test_history_weeks(self):
        args = build_parser().parse_args(["history", "--user", "ana", "--weeks", "6"])
        assert args.weeks == 6


class TestCommands:
    """End-to-end command runs."""

    def test_log_entry(self, run, capsys):
        assert run("log", "--user", "ana", "--date", "2024-03-01", "--mood", "4", "--volume", "8") == 0
        assert "Entry saved for 2024-03-01" in capsys.readouterr().out

    def test_metrics_requires_a_value(self, run, capsys):
        assert run("metrics", "--user", "ana", "--date", "2024-03-01") == 0
        assert "Nothing to save" in capsys.readouterr().out

    def test_metrics_and_risk(self, run, capsys):
        assert run("metrics", "--user", "ana", "--date", "2024-03-01", "--rpe", "6") == 0
        assert run("risk", "--user", "ana", "--date", "2024-03-01") == 0
        assert "Overtraining" in capsys.readouterr().out

    def test_missing_risk(self, run, capsys):
        assert run("risk", "--user", "ana", "--date", "2024-03-01") == 0
        assert "No risk score" in capsys.readouterr().out

    def test_week_and_history(self, run, capsys):
        run("log", "--user", "ana", "--date", "2024-03-12", "--volume", "5")
        assert run("week", "--user", "ana", "--date", "2024-03-13") == 0
        assert run("history", "--user", "ana", "--weeks", "2") == 0
        out = capsys.readouterr().out
        assert "Week of" in out
        assert "Weekly Training Averages" in out

    def test_recent_days(self, run, capsys):
        run("log", "--user", "ana", "--date", "2024-03-12", "--mood", "4", "--notes", "tempo [hard]")
        assert run("recent", "--user", "ana", "--date", "2024-03-13", "--days", "3") == 0
        out = capsys.readouterr().out
        assert "Last 3 days" in out
        assert "2024-03-11" in out
        assert "tempo [hard]" in out

    def test_notes_archive(self, run, capsys):
        assert run("notes", "--user", "ana") == 0
        assert "No notes saved" in capsys.readouterr().out

        run("log", "--user", "ana", "--date", "2024-03-12", "--notes", "long run felt good")
        assert run("notes", "--user", "ana") == 0
        assert "long run felt good" in capsys.readouterr().out

    def test_invalid_date_returns_error(self, run, capsys):
        assert run("log", "--user", "ana", "--date", "yesterday", "--mood", "3") == 1
        assert "Invalid date" in capsys.readouterr().out

    def test_invalid_configuration_returns_error(self, run, capsys, monkeypatch):
        monkeypatch.setenv("JOURNAL_RISK_WINDOW_DAYS", "10")
        get_settings.cache_clear()
        try:
            assert run("week", "--user", "ana", "--date", "2024-03-13") == 1
        finally:
            get_settings.cache_clear()
        assert "risk_window_days" in capsys.readouterr().out

    def test_no_command_prints_help(self, run, capsys):
        assert run() == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestRiskColor:
    @pytest.mark.parametrize("score,color", [(0.1, "green"), (0.4, "yellow"), (0.7, "red")])
    def test_thresholds(self, score, color):
        assert get_risk_color(score) == color
