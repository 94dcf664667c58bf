"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json

import pytest

from number_assignments import __main__
from number_assignments.cli import main


def _write_snapshot(tmp_path):
    snapshot = tmp_path / "export.json"
    snapshot.write_text(
        json.dumps(
            {
                "users": [
                    {"UserPrincipalName": "alice@example.com", "LineURI": "+1000", "DisplayName": "Alice",
                     "FirstName": "Alice", "LastName": "Example"},
                    {"UserPrincipalName": "bob@example.com", "LineURI": "tel:+15551234567;ext=204",
                     "DisplayName": "Bob", "FirstName": "Bob", "LastName": "Example"},
                ],
                "meeting_rooms": [],
                "resource_accounts": [
                    {"UserPrincipalName": "alice@example.com", "DisplayName": "Alice",
                     "PhoneNumber": "+1000", "ApplicationId": "ce933385-9390-45d1-9512-c8d228074e07"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return snapshot


def test_cli_writes_json_report_from_config(tmp_path) -> None:
    snapshot = _write_snapshot(tmp_path)
    output_path = tmp_path / "reports" / "numbers.json"
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "report": "All",
                "format": "json",
                "output": str(output_path),
                "directory": {
                    "class": "number_assignments.directory.snapshot.SnapshotDirectoryClient",
                    "options": {"path": str(snapshot)},
                },
            }
        ),
        encoding="utf-8",
    )

    exit_code = main(["--config", str(config_path)])

    assert exit_code == 0
    rows = json.loads(output_path.read_text(encoding="utf-8"))
    assert [row["UserPrincipalName"] for row in rows] == ["alice@example.com", "bob@example.com"]
    assert rows[0]["Type"] == "AutoAttendantResourceAccount"
    assert rows[1]["Ext"] == "204"


def test_cli_arguments_override_config(tmp_path) -> None:
    snapshot = _write_snapshot(tmp_path)
    output_path = tmp_path / "users.csv"

    exit_code = main(
        [
            "--snapshot",
            str(snapshot),
            "--report",
            "Users",
            "--format",
            "csv",
            "--output",
            str(output_path),
        ]
    )

    assert exit_code == 0
    contents = output_path.read_text(encoding="utf-8")
    assert "alice@example.com" in contents
    assert "AutoAttendantResourceAccount" not in contents


def test_cli_raw_output_prints_json_lines(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    snapshot = _write_snapshot(tmp_path)

    exit_code = main(["--snapshot", str(snapshot), "--format", "none"])

    assert exit_code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [json.loads(line)["DisplayName"] for line in lines] == ["Alice", "Bob"]


def test_cli_missing_snapshot_yields_empty_table(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--snapshot", str(tmp_path / "missing.json")])

    assert exit_code == 0
    assert "No phone number assignments found" in capsys.readouterr().out


def test_cli_raise_on_error_returns_failure(tmp_path) -> None:
    exit_code = main(["--snapshot", str(tmp_path / "missing.json"), "--raise-on-error"])

    assert exit_code == 1


def test_cli_without_directory_client_errors() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--format", "csv"])

    assert excinfo.value.code == 2


def test_module_entry_point_delegates_to_cli(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    snapshot = _write_snapshot(tmp_path)

    exit_code = __main__.main(["--snapshot", str(snapshot), "--format", "table"])

    assert exit_code == 0
    assert "bob@example.com" in capsys.readouterr().out


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m number_assignments" in captured.out
    assert exit_code == 2
