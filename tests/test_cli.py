"""Tests for the tapecalc CLI."""

import json

from typer.testing import CliRunner

from tapecalc.__main__ import app

runner = CliRunner()


def _json(result):
    """Parse the JSON snapshot, skipping any notices printed before it."""
    text = result.stdout
    return json.loads(text[text.index("{"):])


def test_run_shows_result():
    result = runner.invoke(app, ["run", "5", "+", "3", "*", "2", "="])
    assert result.exit_code == 0
    assert "16" in result.output


def test_run_json_snapshot():
    result = runner.invoke(app, ["run", "8", "/", "0", "=", "--json"])
    assert result.exit_code == 0
    data = _json(result)
    assert data["current_value"] == "0"
    assert data["previous_value"] == "8"
    assert data["operation"] == "/"
    assert data["history"] == []


def test_run_json_history():
    result = runner.invoke(app, ["run", "16", "sqrt", "--json"])
    data = _json(result)
    assert data["current_value"] == "4"
    assert data["history"][0]["calculation"] == "√16"
    assert data["history"][0]["result"] == "4"


def test_run_with_history_table():
    result = runner.invoke(app, ["run", "2+2=", "3", "sqr", "--history"])
    assert result.exit_code == 0
    assert "History" in result.output
    assert "2 + 2" in result.output
    assert "Just now" in result.output


def test_run_history_limit_option():
    result = runner.invoke(app, ["run", "2", "sqr", "sqr", "sqr", "--history-limit", "2", "--json"])
    data = _json(result)
    assert [item["result"] for item in data["history"]] == ["256", "16"]


def test_run_rejects_bad_config():
    result = runner.invoke(app, ["run", "1", "--history-limit", "0"])
    assert result.exit_code == 1


def test_run_env_config():
    result = runner.invoke(app, ["run", "1", "--json"], env={"TAPECALC_HISTORY_LIMIT": "oops"})
    assert result.exit_code == 1


def test_keys_lists_bindings():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "Key Bindings" in result.output
    assert "sqrt" in result.output


def test_repl_session():
    result = runner.invoke(app, ["repl"], input="5 + 3\n*2=\nhistory\nquit\n")
    assert result.exit_code == 0
    assert "16" in result.output
    assert "8 × 2" in result.output


def test_repl_exits_on_eof():
    result = runner.invoke(app, ["repl"], input="7\n")
    assert result.exit_code == 0
