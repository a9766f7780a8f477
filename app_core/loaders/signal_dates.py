from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

CANONICAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
COMPACT_RE = re.compile(r"^\d{8}$")

# Explicit replacements for a free-form "parse anything" fallback.
FALLBACK_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y.%m.%d",
    "%d.%m.%Y",
)

# Month names are matched here, not through %b/%B, which follow LC_TIME.
MONTHS = {
    name: i
    for i, names in enumerate(
        [
            ("jan", "january"), ("feb", "february"), ("mar", "march"), ("apr", "april"),
            ("may",), ("jun", "june"), ("jul", "july"), ("aug", "august"),
            ("sep", "sept", "september"), ("oct", "october"), ("nov", "november"), ("dec", "december"),
        ],
        start=1,
    )
    for name in names
}
MONTH_FIRST_RE = re.compile(r"^([A-Za-z]+)\.? (\d{1,2}),? (\d{4})$")  # Mar 5, 2024
DAY_FIRST_RE = re.compile(r"^(\d{1,2}) ([A-Za-z]+)\.? (\d{4})$")  # 5 March 2024
MIN_FALLBACK_YEAR = 1900  # exclusive
MAX_FALLBACK_YEAR = 2100  # exclusive


def format_canonical(d: date) -> str:
    """date -> 'YYYY-MM-DD' (zero-padded)."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_canonical(value: str) -> Optional[date]:
    """
    'YYYY-MM-DD' -> date, or None when the string is not canonical
    or names a day that does not exist (e.g. 2023-02-30).
    """
    if not isinstance(value, str) or not CANONICAL_RE.match(value):
        return None
    year, month, day = (int(p) for p in value.split("-"))
    try:
        d = date(year, month, day)
    except ValueError:
        return None
    # round-trip must give back the same string
    return d if format_canonical(d) == value else None


def _from_slashes(raw: str) -> Optional[str]:
    parts = raw.split("/")
    if len(parts) != 3:
        return None
    first, second, third = parts
    if len(third) == 4 and len(first) <= 2 and len(second) <= 2:
        # MM/DD/YYYY
        return f"{third}-{first.zfill(2)}-{second.zfill(2)}"
    if len(first) == 4 and len(second) <= 2 and len(third) <= 2:
        # YYYY/MM/DD
        return f"{first}-{second.zfill(2)}-{third.zfill(2)}"
    return None


def _from_month_name(raw: str) -> Optional[date]:
    m = MONTH_FIRST_RE.match(raw)
    if m:
        name, day, year = m.groups()
    else:
        m = DAY_FIRST_RE.match(raw)
        if not m:
            return None
        day, name, year = m.groups()
    month = MONTHS.get(name.lower())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def _from_fallback(raw: str) -> Optional[str]:
    parsed = _from_month_name(raw)
    if parsed is None:
        for fmt in FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt).date()
                break
            except ValueError:
                continue
    if parsed is None or not MIN_FALLBACK_YEAR < parsed.year < MAX_FALLBACK_YEAR:
        return None
    return format_canonical(parsed)


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Normalize one CSV date cell to canonical 'YYYY-MM-DD'.

    Tried in order:
      1. already canonical 'YYYY-MM-DD'
      2. 8 digits 'YYYYMMDD'
      3. 'MM/DD/YYYY' or 'YYYY/MM/DD' (whichever segment has 4 chars is the year)
      4. a fixed list of other spellings (FALLBACK_FORMATS, English month names), years 1901-2099 only
    Returns None when nothing matches or the result is not a real calendar day.
    """
    value = (raw or "").strip()
    if not value:
        return None

    if CANONICAL_RE.match(value):
        candidate: Optional[str] = value
    elif COMPACT_RE.match(value):
        candidate = f"{value[:4]}-{value[4:6]}-{value[6:]}"
    elif "/" in value:
        candidate = _from_slashes(value)
    else:
        candidate = _from_fallback(value)

    if candidate is None or parse_canonical(candidate) is None:
        logger.debug("Unparseable date %r", raw)
        return None
    return candidate
