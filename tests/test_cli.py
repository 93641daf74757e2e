"""Tests for the CLI commands."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from studynext.cli import main
from studynext.config import Config


@pytest.fixture
def config(tmp_path):
    return Config(user_id="u1", display_name="Sam", data_dir=str(tmp_path), timezone="UTC")


@pytest.fixture
def run(config):
    runner = CliRunner()

    def invoke(*args):
        with patch("studynext.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))

    return invoke


class TestCli:
    def test_add_then_dashboard_json(self, run):
        result = run("add", "Math", "Worksheet", "--due", "2026-02-05T23:00", "--priority", "high")
        assert result.exit_code == 0, result.output
        run("add", "Art", "Portfolio", "--due", "2026-02-09")

        result = run("dashboard", "--json", "--at", "2026-02-05T20:00")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tonight_mode"] is True
        assert [a["title"] for a in data["visible"]] == ["Worksheet"]
        assert data["today"] == 1
        assert data["upcoming"] == 1

    def test_add_bad_due(self, run):
        result = run("add", "Math", "Worksheet", "--due", "someday")
        assert result.exit_code != 0
        assert "Not an ISO date/time" in result.output

    def test_limit_reached(self, run, config):
        config.free_active_limit = 1
        run("add", "Math", "one", "--due", "2026-02-05")
        result = run("add", "Math", "two", "--due", "2026-02-05")
        assert result.exit_code == 1
        assert "Error: Free plan allows 1" in result.output

    def test_list_empty(self, run):
        result = run("list", "--status", "active")
        assert result.exit_code == 0
        assert "No active assignments." in result.output

    def test_done_awards_xp(self, run, tmp_path):
        run("add", "Math", "Worksheet", "--due", "2026-02-05")
        records = json.loads((tmp_path / "homework.json").read_text())
        result = run("done", records[0]["id"])
        assert result.exit_code == 0
        assert "+100 XP" in result.output

        result = run("profile")
        assert "100 XP" in result.output

    def test_calendar_month(self, run):
        run("add", "Math", "Worksheet", "--due", "2026-02-05")
        result = run("calendar", "month", "--date", "2026-02-01")
        assert result.exit_code == 0
        assert "February 2026" in result.output
        assert " 5*" in result.output

    def test_remind_free(self, run):
        result = run("remind")
        assert "PRO feature" in result.output

    def test_done_twice_awards_once(self, run, tmp_path):
        run("add", "Math", "Worksheet", "--due", "2026-02-05")
        hw_id = json.loads((tmp_path / "homework.json").read_text())[0]["id"]
        run("done", hw_id)
        result = run("done", hw_id)
        assert result.exit_code == 0
        assert "Already done." in result.output
        assert "100 XP" in run("profile").output

    def test_done_unknown_id(self, run):
        result = run("done", "no-such-id")
        assert result.exit_code == 1
        assert "Error: No assignment with id no-such-id" in result.output

    def test_delete(self, run, tmp_path):
        run("add", "Math", "Worksheet", "--due", "2026-02-05")
        hw_id = json.loads((tmp_path / "homework.json").read_text())[0]["id"]
        result = run("delete", hw_id, "--yes")
        assert result.exit_code == 0
        assert json.loads((tmp_path / "homework.json").read_text()) == []

    def test_delete_declined(self, run, tmp_path):
        run("add", "Math", "Worksheet", "--due", "2026-02-05")
        hw_id = json.loads((tmp_path / "homework.json").read_text())[0]["id"]
        result = run("delete", hw_id)
        assert result.exit_code == 1
        assert len(json.loads((tmp_path / "homework.json").read_text())) == 1

    def test_delete_unknown_id(self, run):
        result = run("delete", "no-such-id", "--yes")
        assert result.exit_code == 1
        assert "Error: No assignment with id no-such-id" in result.output

    @pytest.mark.parametrize("command", ["month", "week"])
    def test_calendar_bad_date(self, run, command):
        result = run("calendar", command, "--date", "tomorrow")
        assert result.exit_code == 2
        assert "Not an ISO date" in result.output
