from __future__ import annotations

from pathlib import Path

import pytest

from transmeta.core.catalogs import (
    ReaderCapabilities,
    ReaderRegistry,
    load_builtin_readers,
    select_catalog_reader,
    sniff_file_info,
)
from transmeta.core.catalogs.builtin.json_reader import JsonCatalogReader
from transmeta.core.catalogs.file_info import JSON_MIME, MO_MIME, PO_MIME
from transmeta.core.errors import DuplicateReaderError, NoReaderFoundError


def _registry() -> ReaderRegistry:
    reg = ReaderRegistry()
    load_builtin_readers(reg)
    return reg


def test_sniff_detects_mo_magic_without_extension(write_mo) -> None:
    path = write_mo("catalog.bin")
    info = sniff_file_info(str(path))
    assert info.mime_type == MO_MIME
    assert info.mime_confidence == "high"
    assert info.size_bytes == path.stat().st_size


def test_sniff_text_heuristics(tmp_path: Path) -> None:
    j = tmp_path / "payload.data"
    j.write_bytes(b'\xef\xbb\xbf  {"version": "1"}')
    assert sniff_file_info(str(j)).mime_type == JSON_MIME

    p = tmp_path / "messages.txt"
    p.write_text('# comment\nmsgid ""\nmsgstr ""\n', encoding="utf-8")
    info = sniff_file_info(str(p))
    assert info.mime_type == PO_MIME
    assert info.mime_confidence == "medium"


def test_select_by_extension(write_po, write_mo, tmp_path: Path) -> None:
    reg = _registry()
    assert select_catalog_reader(reg, str(write_po())).metadata.reader_id == "builtin.po_reader"
    assert select_catalog_reader(reg, str(write_mo())).metadata.reader_id == "builtin.mo_reader"

    j = tmp_path / "demo.json"
    j.write_text("{}", encoding="utf-8")
    assert select_catalog_reader(reg, str(j)).metadata.reader_id == "builtin.json_reader"


def test_select_by_content_without_extension(write_mo, tmp_path: Path) -> None:
    reg = _registry()
    assert select_catalog_reader(reg, str(write_mo("catalog.bin"))).metadata.reader_id == "builtin.mo_reader"

    j = tmp_path / "payload.data"
    j.write_text('{"version": "1"}', encoding="utf-8")
    assert select_catalog_reader(reg, str(j)).metadata.reader_id == "builtin.json_reader"


def test_select_unsupported_file_raises(tmp_path: Path) -> None:
    p = tmp_path / "notes.txt"
    p.write_text("hello\n", encoding="utf-8")
    with pytest.raises(NoReaderFoundError):
        select_catalog_reader(_registry(), str(p))


def test_register_duplicate_reader_id_raises() -> None:
    reg = _registry()
    with pytest.raises(DuplicateReaderError):
        reg.register(JsonCatalogReader())


def test_registry_lookup() -> None:
    reg = _registry()
    assert reg.get("builtin.po_reader").metadata.catalog_format == "po"
    assert reg.try_get("builtin.xliff_reader") is None
    with pytest.raises(KeyError):
        reg.get("builtin.xliff_reader")


class _BrokenReader(JsonCatalogReader):
    @property
    def metadata(self):
        md = super().metadata
        return type(md)(reader_id="test.broken", name="Broken", version="0", catalog_format="json")

    def can_handle_file(self, info) -> bool:
        raise RuntimeError("boom")


def test_reader_that_raises_is_skipped(tmp_path: Path) -> None:
    reg = _registry()
    reg.register(_BrokenReader())

    j = tmp_path / "demo.json"
    j.write_text("{}", encoding="utf-8")
    assert select_catalog_reader(reg, str(j)).metadata.reader_id == "builtin.json_reader"


def test_capabilities_size_cap(tmp_path: Path) -> None:
    p = tmp_path / "demo.json"
    p.write_text('{"version": "1"}', encoding="utf-8")
    info = sniff_file_info(str(p))

    assert ReaderCapabilities(supported_extensions=frozenset({".json"}), supported_mime_types=frozenset({JSON_MIME})).matches(info)
    assert not ReaderCapabilities(max_size_bytes=1).matches(info)
