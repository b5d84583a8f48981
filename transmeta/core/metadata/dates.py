from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Dict, Optional

from dateutil import parser as date_parser
from dateutil import tz

log = logging.getLogger("transmeta.metadata")

DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S%z"

# Loose catalog date layout: "2021-05-01 10:20:30 +0200", "2021:05:01 10-20-30 GMT2", ...
_LOOSE_DATE = re.compile(
    r"""
    ^
    (?P<year>[1-9][0-9]{3})
    [-:\s]*(?P<month>0[0-9]|1[012])
    [-:\s]*(?P<day>[012][0-9]|3[01])
    \s*
    (?P<hour>[01][0-9]|2[0-4])
    [-:\s]*(?P<minute>[0-5][0-9])
    [-:\s]*(?P<second>[0-5][0-9](?:\.[0-9]+)?)
    (?P<suffix>.+)
    $
    """,
    re.VERBOSE,
)

# "GMT6" / "UTC 6" -> "GMT+6"
_MISSING_SIGN = re.compile(r"(UTC|GMT)\s*([0-9])", re.IGNORECASE)

# "GMT+6", "UTC-05:30" -> "+06:00", "-05:30" (hours east of UTC)
_NAMED_OFFSET = re.compile(
    r"(?:UTC|GMT)\s*(?P<sign>[+-])\s*(?P<hours>[0-9]{1,2})(?::?(?P<minutes>[0-9]{2}))?",
    re.IGNORECASE,
)


def _explicit_offset(text: str) -> str:
    """Rewrite named offsets into numeric ones.

    dateutil reads "GMT+3" POSIX-style (three hours *behind* GMT); catalogs
    mean three hours ahead.

    """

    def _sub(m: re.Match) -> str:
        hours = int(m.group("hours"))
        minutes = m.group("minutes") or "00"
        return f" {m.group('sign')}{hours:02d}:{minutes}"

    return _NAMED_OFFSET.sub(_sub, text)


_HOUR = 3600

# Fixed offsets for zone abbreviations seen in catalog headers.
# Ambiguous ones take their most common gettext meaning (CST: US Central, IST: India).
ZONE_ABBREVIATIONS: Dict[str, int] = {
    "UT": 0,
    "WET": 0,
    "WEST": 1 * _HOUR,
    "BST": 1 * _HOUR,
    "CET": 1 * _HOUR,
    "CEST": 2 * _HOUR,
    "EET": 2 * _HOUR,
    "EEST": 3 * _HOUR,
    "MSK": 3 * _HOUR,
    "IST": 5 * _HOUR + 30 * 60,
    "JST": 9 * _HOUR,
    "KST": 9 * _HOUR,
    "ACST": 9 * _HOUR + 30 * 60,
    "AEST": 10 * _HOUR,
    "AEDT": 11 * _HOUR,
    "NZST": 12 * _HOUR,
    "NZDT": 13 * _HOUR,
    "HST": -10 * _HOUR,
    "AKST": -9 * _HOUR,
    "AKDT": -8 * _HOUR,
    "PST": -8 * _HOUR,
    "PDT": -7 * _HOUR,
    "MST": -7 * _HOUR,
    "MDT": -6 * _HOUR,
    "CST": -6 * _HOUR,
    "CDT": -5 * _HOUR,
    "EST": -5 * _HOUR,
    "EDT": -4 * _HOUR,
}


class UnknownTimezoneError(ValueError):
    """A zone name that is neither an offset nor a known abbreviation."""


def _resolve_tzinfo(name: Optional[str], offset: Optional[int]) -> Optional[tzinfo]:
    if offset is not None:
        return tz.tzoffset(name, offset)
    if not name:
        return None
    seconds = ZONE_ABBREVIATIONS.get(name.upper())
    if seconds is None:
        raise UnknownTimezoneError(f"unknown timezone {name!r}")
    return tz.tzoffset(name, seconds)


def _reassemble(raw: str) -> tuple[str, bool]:
    """Rebuild a loosely separated date as "YYYY-MM-DD HH:MM:SS <suffix>".

    Returns (text, rolled) where rolled marks an "24:xx" hour that was moved
    to 00 of the following day.

    """

    m = _LOOSE_DATE.match(raw)
    if m is None:
        return raw, False

    suffix = _MISSING_SIGN.sub(r"GMT+\2", m.group("suffix"))
    hour = m.group("hour")
    rolled = hour == "24"
    if rolled:
        hour = "00"
    text = (
        f"{m.group('year')}-{m.group('month')}-{m.group('day')}"
        f" {hour}:{m.group('minute')}:{m.group('second')} {suffix}"
    )
    return text, rolled


def normalize_date(raw: str) -> str:
    """Normalize a catalog date into "YYYY-MM-DD HH:MM:SS+HHMM".

    Accepts the loose separator layouts seen in catalog headers as well as
    anything dateutil understands (ISO-8601 included). Timestamps without a
    zone are taken as UTC; explicit offsets and known abbreviations (CEST,
    PDT, ...) are preserved.

    Returns "" for empty or unparseable input, unknown zone names included.
    Never raises.

    """

    text = (raw or "").strip()
    if not text:
        return ""

    text, rolled = _reassemble(text)
    text = _explicit_offset(text)

    try:
        parsed: datetime = date_parser.parse(text, tzinfos=_resolve_tzinfo)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        if rolled:
            parsed = parsed + timedelta(days=1)
        return parsed.strftime(DATE_FORMAT)
    except (ValueError, OverflowError) as exc:
        log.debug("unparseable catalog date %r: %s", raw, exc)
        return ""
