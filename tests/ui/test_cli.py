from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from rollbook.ui import cli


@pytest.fixture(autouse=True)
def isolated_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    monkeypatch.setenv("ROLLBOOK_DATA_DIR", str(data_dir))
    monkeypatch.delenv("ROLLBOOK_SYSTEM_CATALOG_DIR", raising=False)
    monkeypatch.delenv("ROLLBOOK_POSITION_MATCH_THRESHOLD", raising=False)
    monkeypatch.delenv("ROLLBOOK_TECHNIQUE_MATCH_THRESHOLD", raising=False)
    return data_dir


def test_match_position_prints_best_match(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["match-position", "clsed gaurd"])

    out = capsys.readouterr().out
    assert "Guard / Closed Guard [closed-guard]" in out


def test_match_technique_uses_position_context(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["match-technique", "armbar", "--position", "mount"])

    assert "[mount-armbar]" in capsys.readouterr().out


def test_match_technique_unknown_position_is_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["match-technique", "armbar", "--position", "nowhere"])

    assert excinfo.value.code == 2


def test_no_match_is_reported(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["match-position", "zzqxnomatch"])

    assert "No position match for 'zzqxnomatch'" in capsys.readouterr().out


def test_add_position_persists_to_overlay(
    capsys: pytest.CaptureFixture[str], isolated_data_dir: Path
) -> None:
    cli.main(["add-position", "Octopus Guard", "--parent", "half-guard"])

    out = capsys.readouterr().out
    assert "Guard / Half Guard / Octopus Guard [custom:octopus-guard-" in out
    overlay = json.loads((isolated_data_dir / "user_taxonomy.json").read_text(encoding="utf-8"))
    assert overlay["positions"][0]["parentId"] == "half-guard"

    cli.main(["tree"])
    assert "Octopus Guard [custom:octopus-guard-" in capsys.readouterr().out


def test_add_position_with_unknown_parent_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["add-position", "Lost", "--parent", "nowhere"])

    assert excinfo.value.code == 2


def test_add_technique(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["add-technique", "Gogoplata", "--category", "submission", "--from", "closed-guard"])

    assert "Gogoplata [custom:gogoplata-" in capsys.readouterr().out


def test_invalid_category_is_rejected_by_argparse() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["add-technique", "Thing", "--category", "dance", "--from", "guard"])

    assert excinfo.value.code == 2


def test_reconcile_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = tmp_path / "payload.json"
    payload.write_text(
        json.dumps(
            {
                "session": {
                    "techniques": [{"positionName": "closed gaurd", "techniqueName": "armbar"}],
                    "positionNotes": [{"positionName": "lapel lasso"}],
                }
            }
        ),
        encoding="utf-8",
    )
    output = tmp_path / "matched.json"

    cli.main(["reconcile", str(payload), "--output", str(output)])

    document = json.loads(output.read_text(encoding="utf-8"))
    technique = document["session"]["techniques"][0]
    assert technique["techniqueMatch"]["entityId"] == "closed-guard-armbar"
    assert "Unmatched position: lapel lasso" in capsys.readouterr().err


def test_reconcile_invalid_json_is_usage_error(tmp_path: Path) -> None:
    payload = tmp_path / "payload.json"
    payload.write_text("{broken", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", str(payload)])

    assert excinfo.value.code == 2


def test_reconcile_missing_file_is_runtime_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", str(tmp_path / "absent.json")])

    assert excinfo.value.code == 1


def test_invalid_threshold_env_is_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROLLBOOK_POSITION_MATCH_THRESHOLD", "2")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["tree"])

    assert excinfo.value.code == 2


def test_migrate_sessions_rewrites_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    sessions = tmp_path / "sessions.json"
    sessions.write_text(
        json.dumps(
            [
                {
                    "id": "s-1",
                    "userId": "u-1",
                    "date": "2024-03-01",
                    "sessionType": "regular-class",
                    "giOrNogi": "gi",
                    "sparringRounds": 3,
                    "subsAchieved": 1,
                    "subsReceived": 0,
                    "createdAt": "2024-03-01T20:00:00Z",
                    "updatedAt": "2024-03-01T20:00:00Z",
                },
                {"id": "broken", "schemaVersion": 7},
            ]
        ),
        encoding="utf-8",
    )

    cli.main(["migrate-sessions", str(sessions)])

    captured = capsys.readouterr()
    assert "Migrated 1 session(s); 1 failed" in captured.out
    assert "broken: unsupported schema version 7" in captured.err
    document = json.loads(sessions.read_text(encoding="utf-8"))
    assert document[0]["schemaVersion"] == 2
    assert document[0]["legacySparring"]["rounds"] == 3
    assert document[1] == {"id": "broken", "schemaVersion": 7}


def test_migrate_sessions_defaults_to_data_dir_file(
    isolated_data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    isolated_data_dir.mkdir(parents=True)
    (isolated_data_dir / "sessions.json").write_text("[]", encoding="utf-8")

    cli.main(["migrate-sessions"])

    assert "Migrated 0 session(s); 0 failed" in capsys.readouterr().out


def test_migrate_sessions_missing_file_is_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["migrate-sessions"])

    assert excinfo.value.code == 2


def test_match_technique_help_describes_position_preference(
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["match-technique", "--help"])

    assert excinfo.value.code == 0
    help_text = " ".join(capsys.readouterr().out.split())
    assert "prefer techniques that start from that position" in help_text
