from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from transmeta.core.catalogs.capabilities import ReaderCapabilities
from transmeta.core.catalogs.contracts import CatalogHeaders, ReaderMetadata
from transmeta.core.catalogs.file_info import JSON_MIME, FileInfo
from transmeta.core.errors import CatalogReadError
from transmeta.core.metadata import CANONICAL_KEYS

log = logging.getLogger("transmeta.catalogs")

# JSON catalog key -> header name.
JSON_HEADER_KEYS: Dict[str, str] = {
    "translation-revision-date": "PO-Revision-Date",
    "creation-date": "POT-Creation-Date",
    "version": "Project-Id-Version",
    "generator": "X-Generator",
}

_SCALARS = (str, bool, int, float)


def _lookup_keys() -> Dict[str, str]:
    """Lower-cased JSON key -> header name for every header a JSON catalog may carry."""

    keys = dict(JSON_HEADER_KEYS)
    for header in CANONICAL_KEYS:
        keys.setdefault(header.lower(), header)
    return keys


def _scan_json_text(text: str) -> Dict[str, Any]:
    """Pull known top-level keys out of invalid or truncated JSON text.

    String values are unescaped; true/false/null and numbers are returned
    as lower-cased strings.

    """

    found: Dict[str, Any] = {}
    for key in _lookup_keys():
        m = re.search(
            rf'"(?P<name>{re.escape(key)})"\s*:\s*'
            r'(?:(?P<literal>(?i:true|false|null)|[0-9]+(?:\.[0-9]+)?)'
            r'|"(?P<string>(?:[^"\\]|\\.)*)")\s*[,}]',
            text,
        )
        if m is None:
            continue
        if m.group("string") is not None:
            try:
                found[key] = json.loads(f'"{m.group("string")}"')
            except json.JSONDecodeError:
                found[key] = m.group("string")
        else:
            found[key] = m.group("literal").lower()
    return found


def _jed_language(data: Mapping[str, Any]) -> str:
    """Language from a Jed-style locale_data block, or ""."""

    locale_data = data.get("locale_data")
    if not isinstance(locale_data, Mapping):
        return ""
    for domain in locale_data.values():
        header = domain.get("") if isinstance(domain, Mapping) else None
        if isinstance(header, Mapping) and isinstance(header.get("lang"), str):
            return header["lang"]
    return ""


def headers_from_json(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a decoded JSON catalog object onto raw header names.

    Known keys map to their header names; other top-level scalars pass
    through under their own names for the reconciler to canonicalize.

    """

    lookup = _lookup_keys()
    headers: Dict[str, Any] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, _SCALARS):
            continue
        headers[lookup.get(key.lower(), key)] = value

    if not headers.get("Language") and not headers.get("Locale"):
        lang = _jed_language(data)
        if lang:
            headers["Language"] = lang
    return headers


@dataclass
class JsonCatalogReader:
    """Built-in reader for JSON translation catalogs (Jed / WordPress layout).

    Only the first max_bytes_for_parse bytes are read. When that prefix is not
    valid JSON (truncated or hand-edited files) the known keys are scanned
    for with a regex instead.
    """

    max_bytes_for_parse: int = 100 * 1024

    @property
    def metadata(self) -> ReaderMetadata:
        return ReaderMetadata(
            reader_id="builtin.json_reader",
            name="Built-in JSON Reader",
            version="0.1",
            catalog_format="json",
        )

    @property
    def capabilities(self) -> ReaderCapabilities:
        return ReaderCapabilities(
            supported_mime_types=frozenset({
                "application/json",
                "text/json",
                "application/*+json",
            }),
            supported_extensions=frozenset({".json"}),
            priority_bias=50,
        )

    def can_handle_file(self, info: FileInfo) -> bool:
        if info.extension == ".json":
            return True
        mt = info.mime_type.lower()
        return mt in {"application/json", "text/json"} or mt.endswith("+json")

    def match_score_file(self, info: FileInfo) -> int:
        score = 90
        if info.extension == ".json":
            score += 20
        mt = info.mime_type.lower()
        if mt == JSON_MIME or mt == "text/json" or mt.endswith("+json"):
            score += 40
            if info.mime_confidence == "high":
                score += 20
            elif info.mime_confidence == "medium":
                score += 10
        return score

    def read_headers(self, path: str) -> CatalogHeaders:
        abs_path = os.path.abspath(path)
        try:
            with open(abs_path, "rb") as f:
                raw = f.read(self.max_bytes_for_parse)
        except OSError as exc:
            raise CatalogReadError(f"cannot read catalog {abs_path}: {exc}") from exc

        note = None
        headers: Dict[str, Any] = {}
        text = raw.decode("utf-8-sig", errors="replace")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            if text.lstrip().startswith("{"):
                log.warning("invalid json in %s; scanning for header keys", abs_path)
                headers = headers_from_json(_scan_json_text(text))
                note = f"invalid json; key scan found {len(headers)} header(s)"
            else:
                note = "invalid json; skipped"
        else:
            if isinstance(data, Mapping):
                headers = headers_from_json(data)
            else:
                note = f"top-level json is {type(data).__name__}, not an object"

        return CatalogHeaders(
            reader_id=self.metadata.reader_id,
            catalog_format="json",
            path=abs_path,
            headers=headers,
            note=note,
        )
