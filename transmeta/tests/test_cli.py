from __future__ import annotations

import io
import json
from pathlib import Path

from transmeta.cli.main import main


def test_cli_list_readers(capsys) -> None:
    assert main(["list-readers"]) == 0
    out = capsys.readouterr().out
    assert "builtin.mo_reader" in out
    assert "builtin.po_reader" in out
    assert "builtin.json_reader" in out


def test_cli_inspect_file(write_po, capsys) -> None:
    assert main(["inspect-file", str(write_po())]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["reader_id"] == "builtin.po_reader"
    assert data["raw_headers"]["Language"] == "de-de"
    assert data["headers"]["Language"] == "de_DE"
    assert data["headers"]["Creation-Date"] == "2021-05-01 10:20:30+0200"


def test_cli_inspect_missing_and_unsupported(tmp_path: Path, capsys) -> None:
    assert main(["inspect-file", str(tmp_path / "missing.po")]) == 2
    assert "file not found" in capsys.readouterr().err

    p = tmp_path / "notes.txt"
    p.write_text("hello\n", encoding="utf-8")
    assert main(["inspect-file", str(p)]) == 2
    assert "No catalog reader" in capsys.readouterr().err


def test_cli_normalize_from_file_and_pairs(tmp_path: Path, capsys) -> None:
    src = tmp_path / "headers.json"
    src.write_text(json.dumps({"x_generator": "Loco", "Language": "en-gb"}), encoding="utf-8")

    assert main(["normalize", str(src), "--header", "version=2.0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["Generator"] == "Loco"
    assert data["Locale"] == "en_GB"
    assert data["Project-Id-Version"] == "2.0"


def test_cli_normalize_from_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('{"Version": "1.0"}'))
    assert main(["normalize", "-"]) == 0
    assert json.loads(capsys.readouterr().out)["Project-Id-Version"] == "1.0"


def test_cli_normalize_rejects_bad_input(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert main(["normalize", str(bad)]) == 2
    assert "invalid JSON" in capsys.readouterr().err

    arr = tmp_path / "arr.json"
    arr.write_text("[]", encoding="utf-8")
    assert main(["normalize", str(arr)]) == 2

    assert main(["normalize", "--header", "novalue"]) == 2
    assert "KEY=VALUE" in capsys.readouterr().err


def test_cli_update_record(write_mo, capsys) -> None:
    path = write_mo()
    assert main(["update-record", str(path), "--slug", "demo", "--type", "theme"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "type": "theme",
        "slug": "demo",
        "language": "de_DE",
        "version": "Demo Plugin 1.4.2",
        "updated": "2021-05-01 10:20:30+0200",
        "package": "",
        "autoupdate": False,
    }
