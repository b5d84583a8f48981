from __future__ import annotations

import logging
import os
import re
import struct
from dataclasses import dataclass
from typing import Dict

import polib

from transmeta.core.catalogs.capabilities import ReaderCapabilities
from transmeta.core.catalogs.contracts import CatalogHeaders, ReaderMetadata
from transmeta.core.catalogs.file_info import MO_MIME, FileInfo
from transmeta.core.errors import CatalogReadError
from transmeta.core.metadata import CANONICAL_KEYS

log = logging.getLogger("transmeta.catalogs")


def _scan_mo_lines(path: str, *, max_line_len: int = 256) -> Dict[str, str]:
    """Scan raw .mo bytes line by line for "<Header>: value".

    Used when polib rejects the file. Each line is cut to max_line_len bytes;
    the first match per header wins.

    """

    patterns = {
        key: re.compile(rf"^\s*{re.escape(key)}\s*:\s*(.+)?$") for key in CANONICAL_KEYS
    }
    found: Dict[str, str] = {}
    with open(path, "rb") as f:
        for raw_line in f:
            if len(found) == len(patterns):
                break
            line = raw_line[:max_line_len].decode("utf-8", errors="replace").rstrip("\r\n")
            for key, pat in patterns.items():
                if key in found:
                    continue
                m = pat.match(line)
                if m and m.group(1) is not None:
                    found[key] = m.group(1)
                    break
    return found


@dataclass
class MoCatalogReader:
    """Built-in reader for compiled gettext catalogs (.mo).

    Headers come from the catalog's "" entry as parsed by polib. Files polib
    cannot parse are scanned line by line for known headers instead.
    """

    max_bytes_for_parse: int = 5 * 1024 * 1024

    @property
    def metadata(self) -> ReaderMetadata:
        return ReaderMetadata(
            reader_id="builtin.mo_reader",
            name="Built-in MO Reader",
            version="0.1",
            catalog_format="mo",
        )

    @property
    def capabilities(self) -> ReaderCapabilities:
        return ReaderCapabilities(
            supported_mime_types=frozenset({MO_MIME}),
            supported_extensions=frozenset({".mo"}),
            max_size_bytes=self.max_bytes_for_parse,
            priority_bias=50,
        )

    def can_handle_file(self, info: FileInfo) -> bool:
        return info.extension == ".mo" or info.mime_type == MO_MIME

    def match_score_file(self, info: FileInfo) -> int:
        score = 90
        if info.extension == ".mo":
            score += 20
        if info.mime_type == MO_MIME:
            score += 40
            if info.mime_confidence == "high":
                score += 20
        return score

    def read_headers(self, path: str) -> CatalogHeaders:
        abs_path = os.path.abspath(path)
        if not os.path.isfile(abs_path):
            raise CatalogReadError(f"catalog not found: {abs_path}")

        note = None
        try:
            headers: Dict[str, str] = dict(polib.mofile(abs_path).metadata)
        except (OSError, ValueError, struct.error) as exc:
            log.warning("polib could not parse %s (%s); scanning lines", abs_path, exc)
            headers = _scan_mo_lines(abs_path)
            note = f"mo parse failed; line scan found {len(headers)} header(s)"

        return CatalogHeaders(
            reader_id=self.metadata.reader_id,
            catalog_format="mo",
            path=abs_path,
            headers=headers,
            note=note,
        )
