from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

CANONICAL_KEYS: Tuple[str, ...] = (
    "POT-Creation-Date",
    "PO-Revision-Date",
    "Project-Id-Version",
    "X-Generator",
    "Language",
    "Language-Team",
    "Locale",
    "Version",
    "Creation-Date",
    "Revision-Date",
    "Generator",
    "Team",
)

# Built once; reconcile() copies it into every new header map.
DEFAULT_METADATA: Mapping[str, str] = MappingProxyType({k: "" for k in CANONICAL_KEYS})

# (primary, synonym). Either side is filled from the other only when empty.
SYNONYM_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("Project-Id-Version", "Version"),
    ("X-Generator", "Generator"),
    ("Language", "Locale"),
    ("Language-Team", "Team"),
    ("POT-Creation-Date", "Creation-Date"),
    ("PO-Revision-Date", "Revision-Date"),
)


def canonicalize_key(name: str) -> str:
    """Canonicalize a header name spelling.

    "po_revision_date", "PO revision date" and "Po-Revision-Date" all become
    "PO-Revision-Date". The transform is idempotent and accepts any string.

    """

    lowered = _ascii_lower(name.strip()).replace("_", "-").replace(" ", "-")
    if not lowered:
        return ""

    prefix = ""
    if lowered.startswith("pot-"):
        prefix, lowered = "POT-", lowered[4:]
    elif lowered.startswith("po-"):
        prefix, lowered = "PO-", lowered[3:]

    return prefix + "-".join(_ascii_capitalize(seg) for seg in lowered.split("-"))


# Case mapping is ASCII-only: "ß".upper() == "SS" would break idempotence.
def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


def _ascii_capitalize(segment: str) -> str:
    head = segment[:1]
    if head.isascii():
        return head.upper() + segment[1:]
    return segment
