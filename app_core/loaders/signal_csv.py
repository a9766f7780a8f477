# app_core/loaders/signal_csv.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

import requests

from app_core.config import settings
from app_core.errors import InsufficientData, NetworkError, NoValidRows
from app_core.loaders.signal_dates import normalize_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalRow:
    """One CSV day: canonical date + every non-date column copied verbatim (empty cell -> None)."""

    date: str
    values: Mapping[str, Optional[str]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column: str) -> Optional[str]:
        return self.values.get(column)


@dataclass(frozen=True)
class SignalDataset:
    series: List[SignalRow]
    signal_names: List[str]
    columns: List[str]
    dropped_rows: int = 0


def signal_columns(headers: List[str], marker: str, date_index: int = 0) -> List[str]:
    """Header names (in header order) that carry the signal marker, excluding the date column."""
    return [h for i, h in enumerate(headers) if i != date_index and h != "" and marker in h]


def parse_signal_csv(
    text: str,
    *,
    marker: Optional[str] = None,
    date_index: Optional[int] = None,
) -> SignalDataset:
    """
    Parse raw CSV text into a date-sorted signal series.

    - first line is the header; fewer than 2 lines -> InsufficientData
    - rows with fewer fields than headers or an unusable date are dropped (logged, not raised)
    - zero surviving rows -> NoValidRows
    The sort is stable, so duplicate dates keep their file order.
    """
    marker = settings.signal_marker if marker is None else marker
    date_index = settings.date_column_index if date_index is None else int(date_index)

    lines = (text or "").strip().split("\n")
    if len(lines) < 2:
        raise InsufficientData()

    headers = [h.strip() for h in lines[0].split(",")]
    names = signal_columns(headers, marker, date_index)
    copied = [(i, h) for i, h in enumerate(headers) if i != date_index and h != ""]

    rows: list[SignalRow] = []
    dropped = 0
    for line_no, line in enumerate(lines[1:], start=2):
        cells = [c.strip() for c in line.split(",")]
        if len(cells) < len(headers):
            logger.debug("Line %d skipped: %d fields, expected %d", line_no, len(cells), len(headers))
            dropped += 1
            continue

        canonical = normalize_date(cells[date_index])
        if canonical is None:
            logger.debug("Line %d skipped: bad date %r", line_no, cells[date_index])
            dropped += 1
            continue

        rows.append(SignalRow(canonical, {h: (cells[i] or None) for i, h in copied}))

    if not rows:
        raise NoValidRows()

    rows.sort(key=lambda r: r.date)
    logger.info("Parsed %d rows (%d dropped), %d signals", len(rows), dropped, len(names))
    return SignalDataset(
        series=rows,
        signal_names=names,
        columns=[h for _, h in copied],
        dropped_rows=dropped,
    )


def fetch_signal_csv(url: Optional[str] = None, timeout: Optional[int] = None) -> str:
    """GET the CSV as text. Any transport failure or non-2xx status -> NetworkError."""
    url = url or settings.csv_url
    timeout = timeout or settings.request_timeout
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as exc:
        logger.error("CSV fetch failed for %s: %s", url, exc)
        raise NetworkError(f"Could not download the signal CSV: {exc}") from exc

    r.encoding = "utf-8"
    text = r.text
    logger.info("Fetched %s (%d chars)", url, len(text))
    return text


def load_signal_dataset(
    url: Optional[str] = None,
    fetch: Optional[Callable[[str], str]] = None,
) -> SignalDataset:
    """
    Fetch + parse in one go; raises a SignalLoadError subclass on failure.
    `fetch` maps url -> CSV text (the page passes its cached wrapper); defaults to fetch_signal_csv.
    """
    url = url or settings.csv_url
    return parse_signal_csv((fetch or fetch_signal_csv)(url))
