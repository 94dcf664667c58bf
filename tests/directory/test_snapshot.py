import json

import pandas as pd
import pytest

from number_assignments.directory import DirectoryQueryError, SnapshotDirectoryClient


def _write_snapshot(path, **sections) -> None:
    path.write_text(json.dumps(sections), encoding="utf-8")


def test_snapshot_document_returns_each_category(tmp_path):
    snapshot = tmp_path / "export.json"
    _write_snapshot(
        snapshot,
        users=[{"UserPrincipalName": "jane@example.com", "LineURI": "tel:+1555"}],
        meeting_rooms=[],
        resource_accounts={"UserPrincipalName": "aa@example.com", "PhoneNumber": "tel:+1666"},
    )

    client = SnapshotDirectoryClient(snapshot)

    assert client.get_users() == [{"UserPrincipalName": "jane@example.com", "LineURI": "tel:+1555"}]
    assert client.get_meeting_rooms() == []
    assert client.get_resource_accounts() == [{"UserPrincipalName": "aa@example.com", "PhoneNumber": "tel:+1666"}]


def test_snapshot_document_missing_section_raises(tmp_path):
    snapshot = tmp_path / "export.json"
    _write_snapshot(snapshot, users=[])

    with pytest.raises(DirectoryQueryError):
        SnapshotDirectoryClient(snapshot).get_meeting_rooms()


def test_snapshot_folder_reads_csv_as_strings(tmp_path):
    pd.DataFrame(
        [
            {"UserPrincipalName": "jane@example.com", "LineURI": "+15551234567", "DisplayName": "Jane",
             "FirstName": "Jane", "LastName": ""},
        ]
    ).to_csv(tmp_path / "users.csv", index=False)
    (tmp_path / "resource_accounts.json").write_text(
        json.dumps([{"UserPrincipalName": "cq@example.com", "PhoneNumber": "tel:+1777"}]),
        encoding="utf-8",
    )

    client = SnapshotDirectoryClient(tmp_path)

    users = client.get_users()
    assert users[0]["LineURI"] == "+15551234567"
    assert users[0]["LastName"] == ""
    assert client.get_resource_accounts()[0]["PhoneNumber"] == "tel:+1777"
    with pytest.raises(DirectoryQueryError):
        client.get_meeting_rooms()


def test_snapshot_folder_reads_excel(tmp_path):
    pytest.importorskip("openpyxl")
    pd.DataFrame(
        [{"UserPrincipalName": "room@example.com", "LineURI": "tel:+4420", "DisplayName": "Room"}]
    ).to_excel(tmp_path / "meeting_rooms.xlsx", index=False)

    rooms = SnapshotDirectoryClient(tmp_path).get_meeting_rooms()

    assert rooms == [{"UserPrincipalName": "room@example.com", "LineURI": "tel:+4420", "DisplayName": "Room"}]


def test_snapshot_yaml_document(tmp_path):
    pytest.importorskip("yaml")
    snapshot = tmp_path / "export.yaml"
    snapshot.write_text(
        "users:\n  - UserPrincipalName: jane@example.com\n    LineURI: 'tel:+1555'\n"
        "meeting_rooms: []\nresource_accounts: []\n",
        encoding="utf-8",
    )

    assert SnapshotDirectoryClient(snapshot).get_users()[0]["LineURI"] == "tel:+1555"


def test_missing_snapshot_raises(tmp_path):
    with pytest.raises(DirectoryQueryError):
        SnapshotDirectoryClient(tmp_path / "missing.json").get_users()


def test_snapshot_yaml_keeps_unquoted_numbers_as_text(tmp_path):
    pytest.importorskip("yaml")
    snapshot = tmp_path / "export.yaml"
    snapshot.write_text(
        "users:\n"
        "  - UserPrincipalName: jane@example.com\n    LineURI: +15551234567\n"
        "  - UserPrincipalName: joe@example.com\n    LineURI: 01234567\n"
        "  - UserPrincipalName: nophone@example.com\n    LineURI: null\n"
        "meeting_rooms: []\nresource_accounts: []\n",
        encoding="utf-8",
    )

    users = SnapshotDirectoryClient(snapshot).get_users()

    assert [user["LineURI"] for user in users] == ["+15551234567", "01234567", None]


def test_snapshot_skips_entries_that_are_not_objects(tmp_path):
    snapshot = tmp_path / "export.json"
    _write_snapshot(
        snapshot,
        users=[{"UserPrincipalName": "jane@example.com", "LineURI": "tel:+1555"}, None, "stray"],
        meeting_rooms=[],
        resource_accounts=[],
    )

    assert SnapshotDirectoryClient(snapshot).get_users() == [
        {"UserPrincipalName": "jane@example.com", "LineURI": "tel:+1555"}
    ]


def test_malformed_yaml_snapshot_raises(tmp_path):
    pytest.importorskip("yaml")
    snapshot = tmp_path / "export.yaml"
    snapshot.write_text("users: [\n", encoding="utf-8")

    with pytest.raises(DirectoryQueryError, match="not valid YAML"):
        SnapshotDirectoryClient(snapshot).get_users()
