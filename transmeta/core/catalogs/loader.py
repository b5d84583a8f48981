from __future__ import annotations

from typing import Optional

from transmeta.core.catalogs.builtin.json_reader import JsonCatalogReader
from transmeta.core.catalogs.builtin.mo_reader import MoCatalogReader
from transmeta.core.catalogs.builtin.po_reader import PoCatalogReader
from transmeta.core.catalogs.registry import ReaderRegistry


def load_builtin_readers(registry: ReaderRegistry, *, json_max_bytes: Optional[int] = None) -> None:
    """Register the built-in .mo, .po and JSON readers."""

    json_reader = JsonCatalogReader()
    if json_max_bytes is not None:
        json_reader = JsonCatalogReader(max_bytes_for_parse=int(json_max_bytes))

    for reader in (MoCatalogReader(), PoCatalogReader(), json_reader):
        registry.register(reader)
