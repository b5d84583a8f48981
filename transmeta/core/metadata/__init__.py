"""Translation header normalization for transmeta.

Maps the raw header mappings produced by catalog readers onto one canonical
key set, keeps synonym headers in sync, and normalizes dates and locales.

Notes:
- Pure functions over in-memory strings; no file or network I/O.
- Total: malformed values degrade to "" instead of raising.
"""

from .dates import DATE_FORMAT, normalize_date
from .holder import MetadataHolder
from .keys import CANONICAL_KEYS, DEFAULT_METADATA, SYNONYM_PAIRS, canonicalize_key
from .locales import normalize_locale
from .reconciler import HeaderMap, reconcile

__all__ = [
    "CANONICAL_KEYS",
    "DEFAULT_METADATA",
    "SYNONYM_PAIRS",
    "DATE_FORMAT",
    "HeaderMap",
    "MetadataHolder",
    "canonicalize_key",
    "normalize_date",
    "normalize_locale",
    "reconcile",
]
