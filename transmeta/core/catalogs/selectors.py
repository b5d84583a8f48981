from __future__ import annotations

import logging
from typing import List

from transmeta.core.errors import NoReaderFoundError

from .contracts import CatalogReader
from .file_info import FileInfo, sniff_file_info
from .registry import ReaderRegistry

log = logging.getLogger("transmeta.catalogs")


def select_catalog_reader(registry: ReaderRegistry, path: str) -> CatalogReader:
    """Select the best catalog reader for a path.

    Selection rules:
    1) Sniff FileInfo once.
    2) Keep readers whose capabilities match and whose can_handle_file accepts.
    3) Highest match_score_file + priority_bias wins; ties go to the
       greater reader_id.

    A reader that raises while being asked is skipped, not fatal.
    """

    info: FileInfo = sniff_file_info(path)

    candidates: List[CatalogReader] = []
    for reader in registry.iter_readers():
        try:
            if not reader.capabilities.matches(info):
                continue
            if not reader.can_handle_file(info):
                continue
        except Exception:
            log.warning("reader %s failed during selection", reader.metadata.reader_id, exc_info=True)
            continue
        candidates.append(reader)

    if not candidates:
        raise NoReaderFoundError(f"No catalog reader found for: {path}")

    def _score(r: CatalogReader) -> int:
        try:
            return int(r.match_score_file(info)) + int(r.capabilities.priority_bias)
        except Exception:
            return 0

    candidates.sort(key=lambda r: (_score(r), r.metadata.reader_id), reverse=True)
    return candidates[0]
