from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .dates import normalize_date
from .keys import DEFAULT_METADATA, SYNONYM_PAIRS, canonicalize_key
from .locales import normalize_locale

HeaderMap = Mapping[str, str]

_DATE_KEYS = ("POT-Creation-Date", "Creation-Date", "PO-Revision-Date", "Revision-Date")


def _is_blank(value: Any) -> bool:
    return value is None or value is False or value == ""


def _as_header_value(value: Any) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return ""
    return str(value)


def _fill_synonyms(data: Dict[str, str]) -> None:
    for primary, synonym in SYNONYM_PAIRS:
        if not data.get(primary) and data.get(synonym):
            data[primary] = data[synonym]
        if not data.get(synonym) and data.get(primary):
            data[synonym] = data[primary]


def reconcile(raw: Mapping[Any, Any], *, template: Optional[HeaderMap] = None) -> HeaderMap:
    """Reconcile a raw header mapping into a canonical, read-only HeaderMap.

    Steps:
    1) Seed from the default template (or an earlier HeaderMap).
    2) Canonicalize keys, coerce values to strings; blank values never
       overwrite a value already present.
    3) Fill each synonym pair from whichever side is set.
    4) Normalize Language / Locale.
    5) Normalize dates. All four date headers take the normalized
       POT-Creation-Date value; see DESIGN.md.

    Non-string keys are skipped. Never raises for malformed values.

    """

    data: Dict[str, str] = dict(template if template is not None else DEFAULT_METADATA)
    for key in DEFAULT_METADATA:
        data.setdefault(key, "")

    for key, value in raw.items():
        if not isinstance(key, str):
            continue
        if key not in data:
            key = canonicalize_key(key)
        if _is_blank(value) and data.get(key):
            continue
        data[key] = _as_header_value(value)

    _fill_synonyms(data)

    data["Locale"] = normalize_locale(data["Locale"])
    data["Language"] = normalize_locale(data["Language"])

    created = normalize_date(data["POT-Creation-Date"])
    for key in _DATE_KEYS:
        data[key] = created

    return MappingProxyType(data)
