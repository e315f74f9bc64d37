from __future__ import annotations

import json
from pathlib import Path

import pytest

from imazingtosbr.cli import main

TESTDATA = Path(__file__).parent / "testdata"


def _last_json(out: str) -> dict:
    return json.loads(out.strip().splitlines()[-1])


def test_cli_imports_calls_and_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    archive = tmp_path / "archive.json"
    code = main(
        [
            "--import-file",
            str(TESTDATA / "calls_basic.csv"),
            "--collection-file",
            str(archive),
            "--tag",
            "iphone-12",
            "--log-level",
            "0",
            "--json",
        ]
    )

    assert code == 0
    payload = _last_json(capsys.readouterr().out)
    assert payload["file_kind"] == "call_history"
    assert payload["records_appended"] == 3
    assert payload["tag"] == "iphone-12"
    assert payload["error"] is None
    assert len(json.loads(archive.read_text(encoding="utf-8"))["calls"]) == 3


def test_cli_missing_import_file_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    archive = tmp_path / "archive.json"
    code = main(
        [
            "--import-file",
            str(tmp_path / "missing.csv"),
            "--collection-file",
            str(archive),
            "--log-level",
            "0",
            "--json",
        ]
    )

    assert code == 1
    payload = _last_json(capsys.readouterr().out)
    assert "does not exist" in payload["error"]
    assert payload["file_kind"] == "unknown"
    assert not archive.exists()


def test_cli_reports_unrecognized_format(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "invalid.csv"
    bad.write_text("Invalid,Header,Format\n", encoding="utf-8")
    code = main(
        [
            "--import-file",
            str(bad),
            "--collection-file",
            str(tmp_path / "archive.json"),
            "--log-level",
            "0",
            "--json",
        ]
    )

    assert code == 1
    assert _last_json(capsys.readouterr().out)["file_kind"] == "unknown"


def test_cli_requires_collection_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("IPHONE2SBR_COLLECTION_FILE", raising=False)
    with pytest.raises(SystemExit) as excinfo:
        main(["--import-file", str(TESTDATA / "calls_basic.csv")])
    assert excinfo.value.code == 2


def test_cli_reads_paths_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    archive = tmp_path / "archive.json"
    monkeypatch.setenv("IPHONE2SBR_IMPORT_FILE", str(TESTDATA / "messages_basic.csv"))
    monkeypatch.setenv("IPHONE2SBR_COLLECTION_FILE", str(archive))
    monkeypatch.setenv("IPHONE2SBR_LOG_LEVEL", "0")

    code = main(["--json"])

    assert code == 0
    assert _last_json(capsys.readouterr().out)["totals"]["sms"] == 3


def test_cli_table_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(
        [
            "--import-file",
            str(TESTDATA / "calls_basic.csv"),
            "--collection-file",
            str(tmp_path / "archive.json"),
            "--log-level",
            "0",
        ]
    )

    assert code == 0
    assert "Import Complete" in capsys.readouterr().out


def test_cli_dump_config(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    assert main(["--dump-config", str(target)]) == 0
    assert "collection_file" in target.read_text(encoding="utf-8")


def test_cli_malformed_config_is_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("import_file: [unclosed\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--config",
                str(config),
                "--import-file",
                str(TESTDATA / "calls_basic.csv"),
                "--collection-file",
                str(tmp_path / "archive.json"),
            ]
        )
    assert excinfo.value.code == 2
    assert "invalid YAML" in capsys.readouterr().err
    assert not (tmp_path / "archive.json").exists()


def test_cli_rejects_log_level_outside_scale(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--import-file",
                str(TESTDATA / "calls_basic.csv"),
                "--collection-file",
                str(tmp_path / "archive.json"),
                "--log-level",
                "5",
            ]
        )
    assert excinfo.value.code == 2
