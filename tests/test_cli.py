"""
Smoke tests for the command line interface.
"""

# SPDX-License-Identifier: MIT

import json

import pytest
from typer.testing import CliRunner

from ticktrack.terminal.app import app

runner = CliRunner()


def invoke_json(*args):
    """
    Run a command with --json and decode its envelope.

    Returns
    -------
    tuple[int, dict]
        Exit code and decoded JSON payload.
    """
    result = runner.invoke(app, ["--json", *args])
    return result.exit_code, json.loads(result.stdout)


def test_start_status_stop_round():
    exit_code, started = invoke_json(
        "start", "Write docs", "--tag", "docs,writing", "--at", "2026-02-25T09:00:00Z"
    )
    assert exit_code == 0
    assert started["ok"] is True
    assert started["data"]["start_time"] == "2026-02-25T09:00:00.000Z"
    assert started["data"]["tags"] == ["docs", "writing"]

    exit_code, status = invoke_json("status")
    assert exit_code == 0
    assert status["data"]["running"] is True
    assert status["data"]["entry"]["id"] == started["data"]["id"]

    exit_code, stopped = invoke_json("stop", "--at", "2026-02-25T10:30:00Z")
    assert exit_code == 0
    assert stopped["data"]["duration_seconds"] == 5400


def test_second_start_reports_error_envelope():
    invoke_json("start", "First")

    exit_code, payload = invoke_json("start", "Second")

    assert exit_code == 1
    assert payload["ok"] is False
    assert payload["error"]["code"] == "TIMER_ALREADY_RUNNING"
    assert payload["error"]["suggestions"]


def test_log_and_report_by_project():
    invoke_json("project", "create", "Acme", "--rate", "100", "--currency", "eur")
    exit_code, logged = invoke_json(
        "log",
        "Planning",
        "--from",
        "2026-02-24T09:00:00Z",
        "--duration",
        "1h30m",
        "--project",
        "Acme",
    )
    assert exit_code == 0
    assert logged["data"]["duration_seconds"] == 5400

    exit_code, report = invoke_json(
        "report", "--from", "2026-02-24", "--to", "2026-02-25"
    )

    assert exit_code == 0
    assert report["data"]["total_seconds"] == 5400
    assert report["data"]["period"]["from"] == "2026-02-24T00:00:00.000Z"
    group = report["data"]["groups"][0]
    assert group["key"] == "Acme"
    assert group["billable_amount"] == 150.0
    assert group["currency"] == "EUR"


def test_log_rejects_to_and_duration_together():
    exit_code, payload = invoke_json(
        "log",
        "--from",
        "2026-02-24T09:00:00Z",
        "--to",
        "2026-02-24T10:00:00Z",
        "--duration",
        "1h",
    )

    assert exit_code == 1
    assert payload["error"]["code"] == "VALIDATION_ERROR"


def test_invalid_date_is_a_validation_error():
    exit_code, payload = invoke_json("start", "--at", "next blue moon")

    assert exit_code == 1
    assert payload["error"]["code"] == "VALIDATION_ERROR"
    assert "next blue moon" in payload["error"]["message"]


def test_delete_refuses_running_entry_but_cancel_works():
    _, started = invoke_json("start", "Oops")
    entry_id = started["data"]["id"]

    exit_code, payload = invoke_json("delete", entry_id)
    assert exit_code == 1
    assert payload["error"]["code"] == "VALIDATION_ERROR"

    exit_code, cancelled = invoke_json("cancel")
    assert exit_code == 0
    assert cancelled["data"]["id"] == entry_id


def test_config_set_and_get():
    exit_code, set_payload = invoke_json("config", "set", "default_billable", "false")
    assert exit_code == 0
    assert set_payload["data"] == {"key": "default_billable", "value": False}

    exit_code, get_payload = invoke_json("config", "get", "default_billable")
    assert exit_code == 0
    assert get_payload["data"]["value"] is False

    _, started = invoke_json("start", "Unbilled")
    assert started["data"]["billable"] is False


def test_unknown_config_key():
    exit_code, payload = invoke_json("config", "get", "colour")

    assert exit_code == 1
    assert payload["error"]["code"] == "CONFIG_KEY_UNKNOWN"


def test_project_delete_requires_force_when_referenced():
    invoke_json("project", "create", "Acme")
    invoke_json(
        "log", "--from", "2026-02-24T09:00:00Z", "--duration", "30m", "-p", "Acme"
    )

    exit_code, payload = invoke_json("project", "delete", "Acme")
    assert exit_code == 1
    assert payload["error"]["code"] == "PROJECT_HAS_ENTRIES"

    exit_code, _ = invoke_json("project", "delete", "Acme", "--force")
    assert exit_code == 0

    _, listed = invoke_json("list")
    assert listed["data"]["entries"][0]["project_id"] is None


@pytest.mark.parametrize("command", [["status"], ["st"]])
def test_status_text_output_when_idle(command):
    """
    Parameters
    ----------
    command : list[str]
        Command name or its alias.
    """
    result = runner.invoke(app, command)

    assert result.exit_code == 0
    assert "No timer running." in result.stdout


def test_export_csv_to_stdout():
    invoke_json("log", "Work", "--from", "2026-02-24T09:00:00Z", "--duration", "1h")

    result = runner.invoke(app, ["export"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == (
        "id,description,project,start_time,end_time,duration_seconds,tags,billable"
    )
    assert "2026-02-24T09:00:00.000Z" in lines[1]


def test_export_to_file(tmp_path):
    invoke_json("log", "Work", "--from", "2026-02-24T09:00:00Z", "--duration", "1h")
    output = tmp_path / "entries.json"

    exit_code, payload = invoke_json(
        "export", "--format", "json", "--output", str(output)
    )

    assert exit_code == 0
    assert payload["data"]["entry_count"] == 1
    assert json.loads(output.read_text())[0]["description"] == "Work"
