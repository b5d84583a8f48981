from __future__ import annotations

import re

_LOCALE = re.compile(r"^(?P<prefix>[_-]*[a-zA-Z]*[_-]+)?(?P<suffix>[a-zA-Z]+)$")


def normalize_locale(raw: str) -> str:
    """Normalize a locale tag to "lang" or "lang_REGION".

    "en-us" -> "en_US", "EN" -> "en". Input that does not look like a
    language/region pair is returned trimmed but otherwise unchanged.

    """

    text = (raw or "").strip()
    if not text:
        return ""

    m = _LOCALE.match(text)
    if m is None:
        return text

    suffix = m.group("suffix")
    if m.group("prefix") is None:
        # Bare language tag.
        return suffix.lower()

    prefix = m.group("prefix").strip("-_")
    if not prefix:
        # Region only ("_br").
        return suffix.upper()
    return f"{prefix.lower()}_{suffix.upper()}"
