from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from app_core.config import settings
from app_core.loaders.signal_csv import SignalRow

SELL, BUY, HOLD = "sell", "buy", "hold"
DEFAULT_SIGNAL_VALUE = "Hold"

SIGNAL_COLORS: Dict[str, str] = {
    SELL: "#ef4444",
    BUY: "#22c55e",
    HOLD: "#6b72801a",
}
GAUGE_HOLD_COLOR = "#6b7280"
GAUGE_EMPTY_COLOR = "#d1d5db"
BUBBLE_SIZE = 400


@dataclass(frozen=True)
class SignalCounts:
    sell: int
    buy: int
    hold: int
    total: int


@dataclass(frozen=True)
class ChartPoint:
    x: int  # date index within the window
    y: int  # signal index within signal_names
    date: str
    signal: str
    label: str
    value: str
    kind: str
    color: str


@dataclass(frozen=True)
class WindowStats:
    total_days: int
    total_signals: int
    sell: int
    buy: int
    hold: int


def classify_signal(value: Optional[str]) -> str:
    """Case-insensitive sell/buy; anything else (including missing) is hold."""
    v = (value or "").strip().lower()
    if v == SELL:
        return SELL
    if v == BUY:
        return BUY
    return HOLD


def signal_color(value: Optional[str]) -> str:
    return SIGNAL_COLORS[classify_signal(value)]


def display_name(signal: str, marker: Optional[str] = None) -> str:
    """'rsi_signal' -> 'rsi' (first occurrence of the marker removed)."""
    marker = settings.signal_marker if marker is None else marker
    return signal.replace(marker, "", 1) if marker else signal


def available_dates(series: Sequence[SignalRow]) -> List[str]:
    return sorted({row.date for row in series if row.date})


def recent_window(series: Sequence[SignalRow], n: Optional[int] = None) -> List[SignalRow]:
    """Last n rows, chronological order kept; everything when fewer than n exist."""
    n = settings.recent_days if n is None else int(n)
    if n <= 0:
        return []
    return list(series[-n:])


def chart_points(window: Sequence[SignalRow], signal_names: Sequence[str]) -> List[ChartPoint]:
    points: list[ChartPoint] = []
    for x, row in enumerate(window):
        for y, name in enumerate(signal_names):
            value = row.get(name) or DEFAULT_SIGNAL_VALUE
            kind = classify_signal(value)
            points.append(
                ChartPoint(
                    x=x,
                    y=y,
                    date=row.date,
                    signal=name,
                    label=display_name(name),
                    value=value,
                    kind=kind,
                    color=SIGNAL_COLORS[kind],
                )
            )
    return points


def axis_labels(window: Sequence[SignalRow], signal_names: Sequence[str]) -> Tuple[List[str], List[str]]:
    """(x labels as 'MM-DD', y labels as display names)."""
    x = [row.date[5:] if len(row.date) >= 10 else row.date for row in window]
    y = [display_name(name) for name in signal_names]
    return x, y


def find_row(series: Sequence[SignalRow], day: str) -> Optional[SignalRow]:
    """First row for the date (stable sort => first in file order)."""
    for row in series:
        if row.date == day:
            return row
    return None


def signal_counts_for(
    day: Optional[str],
    series: Sequence[SignalRow],
    signal_names: Sequence[str],
) -> Optional[SignalCounts]:
    """
    Tally sell/buy/hold for one date. None means "no data" (date missing),
    which is different from an all-hold day.
    """
    if not day:
        return None
    row = find_row(series, day)
    if row is None:
        return None

    tally = {SELL: 0, BUY: 0, HOLD: 0}
    for name in signal_names:
        tally[classify_signal(row.get(name))] += 1
    return SignalCounts(
        sell=tally[SELL],
        buy=tally[BUY],
        hold=tally[HOLD],
        total=tally[SELL] + tally[BUY] + tally[HOLD],
    )


def gauge_needle_value(counts: Optional[SignalCounts]) -> float:
    """clamp(50 + 50 * (buy_ratio - sell_ratio), 0, 100); 50 when there is nothing to count."""
    if counts is None or counts.total <= 0:
        return 50.0
    sentiment = counts.buy / counts.total - counts.sell / counts.total
    return float(np.clip(50.0 + 50.0 * sentiment, 0.0, 100.0))


def gauge_segments(counts: Optional[SignalCounts]) -> List[Tuple[float, str]]:
    """
    Band end offsets in [0,1] for the gauge axis: sell (red), hold (gray), buy (green).
    Offsets are kept strictly increasing (zero-width bands nudged by 1e-4), capped at 1.
    """
    if counts is None or counts.total <= 0:
        return [(1.0, GAUGE_EMPTY_COLOR)]

    raw = [
        (counts.sell / counts.total, SIGNAL_COLORS[SELL]),
        ((counts.sell + counts.hold) / counts.total, GAUGE_HOLD_COLOR),
        (1.0, SIGNAL_COLORS[BUY]),
    ]
    out: list[tuple[float, str]] = []
    prev = 0.0
    for offset, color in raw:
        if offset <= prev:
            offset = prev + 0.0001
        offset = min(1.0, offset)
        out.append((offset, color))
        prev = offset
    return out


def window_stats(points: Sequence[ChartPoint], window_days: int, signal_count: int) -> WindowStats:
    return WindowStats(
        total_days=int(window_days),
        total_signals=int(signal_count),
        sell=sum(1 for p in points if p.kind == SELL),
        buy=sum(1 for p in points if p.kind == BUY),
        hold=sum(1 for p in points if p.kind == HOLD),
    )


def series_to_frame(series: Sequence[SignalRow], columns: Sequence[str]) -> pd.DataFrame:
    """Parsed series as a table: 'date' + the copied columns, in header order."""
    cols = ["date", *columns]
    if not series:
        return pd.DataFrame(columns=cols)
    records = [{"date": row.date, **{c: row.get(c) for c in columns}} for row in series]
    return pd.DataFrame.from_records(records, columns=cols)
