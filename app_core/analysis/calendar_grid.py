from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from app_core.loaders.signal_dates import format_canonical, parse_canonical


@dataclass(frozen=True)
class CalendarDay:
    day: int
    iso: str
    enabled: bool
    selected: bool


Week = List[Optional[CalendarDay]]


def months_with_data(dates: Iterable[str]) -> List[Tuple[int, int]]:
    """Sorted unique (year, month) pairs that contain at least one date."""
    out = set()
    for d in dates:
        parsed = parse_canonical(d)
        if parsed is not None:
            out.add((parsed.year, parsed.month))
    return sorted(out)


def default_month(dates: List[str], selected: Optional[str]) -> Optional[Tuple[int, int]]:
    picked = parse_canonical(selected) if selected else None
    if picked is not None:
        return picked.year, picked.month
    months = months_with_data(dates)
    return months[-1] if months else None


def month_grid(
    year: int,
    month: int,
    available: Iterable[str],
    selected: Optional[str] = None,
    firstweekday: int = calendar.SUNDAY,
) -> List[Week]:
    """
    Weeks of one month; None fills days outside the month.
    Days not in `available` come back disabled.
    """
    allowed = set(available)
    cal = calendar.Calendar(firstweekday=firstweekday)
    weeks: list[Week] = []
    for week in cal.monthdayscalendar(year, month):
        row: Week = []
        for day in week:
            if day == 0:
                row.append(None)
                continue
            iso = format_canonical(date(year, month, day))
            row.append(CalendarDay(day=day, iso=iso, enabled=iso in allowed, selected=iso == selected))
        weeks.append(row)
    return weeks


def weekday_headers(firstweekday: int = calendar.SUNDAY) -> List[str]:
    cal = calendar.Calendar(firstweekday=firstweekday)
    return [calendar.day_abbr[i][:2] for i in cal.iterweekdays()]
