"""Tests for the GymFlow CLI commands."""

import json

from typer.testing import CliRunner

from cli.cli import app

runner = CliRunner()


def test_trend_prints_summary(db_session, make_exercise, add_logs):
    exercise = make_exercise("strength")
    add_logs(exercise, [(80, 10, 1)] * 8 + [(100, 10, 1)] * 8)

    result = runner.invoke(app, ["trend", str(exercise.id)])

    assert result.exit_code == 0, result.output
    assert "Improving" in result.output
    assert "Bench Press" in result.output


def test_trend_json_output(db_session, make_exercise, add_logs):
    exercise = make_exercise("timed", name="Plank")
    add_logs(exercise, [(60,)] * 3)

    result = runner.invoke(app, ["trend", str(exercise.id), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["state"] == "insufficient_data"
    assert payload["session_count"] == 3


def test_trend_missing_exercise(db_session):
    result = runner.invoke(app, ["trend", "999"])

    assert result.exit_code == 1
    assert "Exercise 999 not found" in result.output


def test_init_db_seeds(db_session):
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0, result.output
    assert "Database ready" in result.output
