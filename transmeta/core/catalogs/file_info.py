from __future__ import annotations

import fnmatch
import mimetypes
import os
from dataclasses import dataclass
from typing import Optional, Tuple

MO_MIME = "application/x-gettext-translation"
PO_MIME = "text/x-gettext-translation"
JSON_MIME = "application/json"

# GNU gettext .mo magic, little- and big-endian.
_MO_MAGIC = (b"\xde\x12\x04\x95", b"\x95\x04\x12\xde")

_EXTENSION_MIME = {
    ".mo": MO_MIME,
    ".po": PO_MIME,
    ".pot": PO_MIME,
    ".json": JSON_MIME,
}


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Metadata-only view of a catalog file used for reader selection.

    Sniffing reads only a bounded prefix; the file is never parsed here.

    """

    path: str
    size_bytes: int
    extension: str
    mime_type: str
    mime_confidence: str  # "high" | "medium" | "low"


def sniff_file_info(path: str, *, prefix_bytes: int = 512) -> FileInfo:
    """Compute FileInfo for a path.

    Order: magic number (high), JSON / PO text heuristics (medium),
    extension guess (low).

    """

    abs_path = os.path.abspath(path)
    ext = os.path.splitext(abs_path)[1].lower()
    mime, confidence = _content_mime(_read_prefix(abs_path, prefix_bytes))
    if mime is None:
        mime = _EXTENSION_MIME.get(ext) or mimetypes.guess_type(abs_path)[0] or "application/octet-stream"

    return FileInfo(
        path=abs_path,
        size_bytes=os.stat(abs_path).st_size,
        extension=ext,
        mime_type=mime,
        mime_confidence=confidence,
    )


def _read_prefix(path: str, n: int) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read(n)
    except OSError:
        return b""


def _content_mime(head: bytes) -> Tuple[Optional[str], str]:
    """(mime, confidence) from leading bytes; (None, "low") when nothing is recognized."""

    if head[:4] in _MO_MAGIC:
        return MO_MIME, "high"
    text_mime = _json_heuristic_mime(head) or _po_heuristic_mime(head)
    if text_mime is not None:
        return text_mime, "medium"
    return None, "low"


def _strip_bom(prefix: bytes) -> bytes:
    if prefix.startswith(b"\xef\xbb\xbf"):
        return prefix[3:]
    return prefix


def _json_heuristic_mime(prefix: bytes) -> Optional[str]:
    """Leading "{" or "[" after BOM and whitespace."""

    p = _strip_bom(prefix).lstrip()
    if p.startswith(b"{") or p.startswith(b"["):
        return JSON_MIME
    return None


def _po_heuristic_mime(prefix: bytes) -> Optional[str]:
    """A gettext text catalog opens with comments or a msgid/msgctxt entry."""

    for line in _strip_bom(prefix).splitlines():
        line = line.strip()
        if not line or line.startswith(b"#"):
            continue
        if line.startswith((b"msgid", b"msgctxt")):
            return PO_MIME
        return None
    return None


def mime_matches(pattern: str, mime: str) -> bool:
    """Match a mime against "*", "type/*", a glob, or an exact value."""

    pat = pattern.strip().lower()
    m = mime.strip().lower()

    if pat in {"*", "*/*"}:
        return True
    if "*" in pat:
        return fnmatch.fnmatchcase(m, pat)
    return pat == m
