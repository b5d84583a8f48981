from __future__ import annotations

import json
from pathlib import Path

import pytest

from transmeta.core.catalogs.builtin.json_reader import JsonCatalogReader, headers_from_json
from transmeta.core.catalogs.builtin.mo_reader import MoCatalogReader
from transmeta.core.catalogs.builtin.po_reader import PoCatalogReader
from transmeta.core.errors import CatalogReadError
from transmeta.core.metadata import reconcile


def test_po_reader_reads_header_entry(write_po) -> None:
    path = write_po()
    result = PoCatalogReader().read_headers(str(path))

    assert result.reader_id == "builtin.po_reader"
    assert result.catalog_format == "po"
    assert result.note is None
    assert result.headers["Project-Id-Version"] == "Demo Plugin 1.4.2"
    assert result.headers["Language"] == "de-de"


def test_po_reader_falls_back_to_header_scan(tmp_path: Path) -> None:
    path = tmp_path / "broken.po"
    path.write_text(
        'msgid ""\n'
        'msgstr ""\n'
        '"Project-Id-Version: Demo 2.0\\n"\n'
        '"Language: fr\\n"\n'
        "\n"
        "this is not po syntax\n",
        encoding="utf-8",
    )

    result = PoCatalogReader().read_headers(str(path))
    assert result.note and "header scan" in result.note
    assert result.headers == {"Project-Id-Version": "Demo 2.0", "Language": "fr"}


def test_po_reader_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogReadError):
        PoCatalogReader().read_headers(str(tmp_path / "missing.po"))


def test_mo_reader_reads_compiled_catalog(write_mo) -> None:
    path = write_mo()
    result = MoCatalogReader().read_headers(str(path))

    assert result.reader_id == "builtin.mo_reader"
    assert result.note is None
    assert result.headers["X-Generator"] == "Poedit 3.0"
    assert result.headers["POT-Creation-Date"] == "2021-05-01 10:20:30+0200"


def test_mo_reader_falls_back_to_line_scan(tmp_path: Path) -> None:
    path = tmp_path / "broken.mo"
    path.write_bytes(b"garbage\nProject-Id-Version: Demo 1.0\nLanguage: de\n")

    result = MoCatalogReader().read_headers(str(path))
    assert result.note and "line scan" in result.note
    assert result.headers["Project-Id-Version"] == "Demo 1.0"
    assert result.headers["Language"] == "de"
    assert "Version" not in result.headers


def test_mo_reader_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogReadError):
        MoCatalogReader().read_headers(str(tmp_path / "missing.mo"))


def test_json_reader_maps_known_keys_and_jed_language(tmp_path: Path) -> None:
    path = tmp_path / "demo-de_DE-1234.json"
    path.write_text(
        json.dumps(
            {
                "translation-revision-date": "2021-01-01 10:00:00+0000",
                "generator": "GlotPress/3.0",
                "domain": "messages",
                "locale_data": {
                    "messages": {
                        "": {"domain": "messages", "lang": "de_DE", "plural-forms": "nplurals=2;"},
                        "Hello": ["Hallo"],
                    }
                },
            }
        ),
        encoding="utf-8",
    )

    result = JsonCatalogReader().read_headers(str(path))
    assert result.note is None
    assert result.headers["PO-Revision-Date"] == "2021-01-01 10:00:00+0000"
    assert result.headers["X-Generator"] == "GlotPress/3.0"
    assert result.headers["Language"] == "de_DE"
    assert result.headers["domain"] == "messages"
    assert "locale_data" not in result.headers

    out = reconcile(result.headers)
    assert out["Generator"] == "GlotPress/3.0"
    assert out["Locale"] == "de_DE"
    assert out["Domain"] == "messages"


def test_json_reader_scans_truncated_json(tmp_path: Path) -> None:
    path = tmp_path / "truncated.json"
    path.write_text(
        '{"creation-date": "2020-01-02 03:04:05+0000", "version": "1.0", "locale_data": {',
        encoding="utf-8",
    )

    result = JsonCatalogReader().read_headers(str(path))
    assert result.note and "key scan" in result.note
    assert result.headers["POT-Creation-Date"] == "2020-01-02 03:04:05+0000"
    assert result.headers["Project-Id-Version"] == "1.0"


def test_json_reader_parse_cap_triggers_scan(tmp_path: Path) -> None:
    path = tmp_path / "big.json"
    path.write_text(
        json.dumps({"version": "3.1", "padding": "x" * 500}),
        encoding="utf-8",
    )

    result = JsonCatalogReader(max_bytes_for_parse=64).read_headers(str(path))
    assert result.note is not None
    assert result.headers["Project-Id-Version"] == "3.1"


def test_json_reader_non_object_top_level(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    result = JsonCatalogReader().read_headers(str(path))
    assert result.headers == {}
    assert result.note and "list" in result.note


def test_json_reader_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogReadError):
        JsonCatalogReader().read_headers(str(tmp_path / "missing.json"))


def test_headers_from_json_prefers_explicit_language() -> None:
    headers = headers_from_json(
        {
            "language": "fr_FR",
            "locale_data": {"messages": {"": {"lang": "de_DE"}}},
        }
    )
    assert headers["Language"] == "fr_FR"
