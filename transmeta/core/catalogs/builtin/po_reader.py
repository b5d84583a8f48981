from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict

import polib

from transmeta.core.catalogs.capabilities import ReaderCapabilities
from transmeta.core.catalogs.contracts import CatalogHeaders, ReaderMetadata
from transmeta.core.catalogs.file_info import PO_MIME, FileInfo
from transmeta.core.errors import CatalogReadError
from transmeta.core.metadata import CANONICAL_KEYS

log = logging.getLogger("transmeta.catalogs")

_TRAILING_QUOTE = re.compile(r'(\\n)?"$')


def _scan_po_header(path: str, *, max_bytes: int = 8 * 1024) -> Dict[str, str]:
    """Find '"Header: value\\n"' lines in the first max_bytes of a .po file.

    Used when polib rejects the file.

    """

    with open(path, "rb") as f:
        text = f.read(max_bytes).decode("utf-8", errors="replace").replace("\r", "\n")

    found: Dict[str, str] = {}
    for key in CANONICAL_KEYS:
        m = re.search(
            rf'^[ \t/*#@]*"{re.escape(key)}:(.*)$',
            text,
            flags=re.IGNORECASE | re.MULTILINE,
        )
        if m is None:
            continue
        value = m.group(1).strip()
        if value.endswith("*/"):
            value = value[:-2].strip()
        found[key] = _TRAILING_QUOTE.sub("", value)
    return found


@dataclass
class PoCatalogReader:
    """Built-in reader for text gettext catalogs (.po / .pot)."""

    max_bytes_for_parse: int = 5 * 1024 * 1024

    @property
    def metadata(self) -> ReaderMetadata:
        return ReaderMetadata(
            reader_id="builtin.po_reader",
            name="Built-in PO Reader",
            version="0.1",
            catalog_format="po",
        )

    @property
    def capabilities(self) -> ReaderCapabilities:
        return ReaderCapabilities(
            supported_mime_types=frozenset({PO_MIME}),
            supported_extensions=frozenset({".po", ".pot"}),
            max_size_bytes=self.max_bytes_for_parse,
            priority_bias=50,
        )

    def can_handle_file(self, info: FileInfo) -> bool:
        return info.extension in {".po", ".pot"} or info.mime_type == PO_MIME

    def match_score_file(self, info: FileInfo) -> int:
        score = 90
        if info.extension in {".po", ".pot"}:
            score += 20
        if info.mime_type == PO_MIME:
            score += 40
            if info.mime_confidence == "medium":
                score += 10
        return score

    def read_headers(self, path: str) -> CatalogHeaders:
        abs_path = os.path.abspath(path)
        # polib treats a non-existent path as catalog source text.
        if not os.path.isfile(abs_path):
            raise CatalogReadError(f"catalog not found: {abs_path}")

        note = None
        try:
            headers: Dict[str, str] = dict(polib.pofile(abs_path).metadata)
        except (OSError, ValueError) as exc:
            log.warning("polib could not parse %s (%s); scanning header", abs_path, exc)
            headers = _scan_po_header(abs_path)
            note = f"po parse failed; header scan found {len(headers)} header(s)"

        return CatalogHeaders(
            reader_id=self.metadata.reader_id,
            catalog_format="po",
            path=abs_path,
            headers=headers,
            note=note,
        )
