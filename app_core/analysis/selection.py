from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from app_core.analysis.signal_views import SignalCounts, available_dates, signal_counts_for
from app_core.errors import SignalLoadError
from app_core.loaders.signal_csv import SignalDataset, SignalRow
from app_core.loaders.signal_dates import normalize_date

logger = logging.getLogger(__name__)

# st.session_state key shared by the pages
STATE_KEY = "dashboard_state"


class Status(str, Enum):
    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    NO_DATA = "no_data"
    FAILED = "failed"


@dataclass
class DashboardState:
    """
    All mutable session state in one place.
    Transitions below take the state by reference and re-derive `counts`
    after every change of selection.
    """

    status: Status = Status.UNINITIALIZED
    series: List[SignalRow] = field(default_factory=list)
    signal_names: List[str] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    dropped_rows: int = 0
    selected_date: Optional[str] = None
    counts: Optional[SignalCounts] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is Status.UNINITIALIZED


def refresh_counts(state: DashboardState) -> Optional[SignalCounts]:
    state.counts = signal_counts_for(state.selected_date, state.series, state.signal_names)
    return state.counts


def apply_loaded(state: DashboardState, dataset: SignalDataset) -> DashboardState:
    """Load succeeded: keep the data, pick the latest date unless something is already selected."""
    state.series = list(dataset.series)
    state.signal_names = list(dataset.signal_names)
    state.columns = list(dataset.columns)
    state.dropped_rows = int(dataset.dropped_rows)
    state.dates = available_dates(state.series)
    state.error = None

    if not state.dates:
        state.status = Status.NO_DATA
        state.selected_date = None
        state.counts = None
        logger.info("Load finished with no rows -> no_data")
        return state

    if state.selected_date not in state.dates:
        state.selected_date = state.dates[-1]
    state.status = Status.IDLE
    refresh_counts(state)
    logger.info("Load finished: %d dates, selected %s", len(state.dates), state.selected_date)
    return state


def apply_failed(state: DashboardState, exc: SignalLoadError) -> DashboardState:
    state.status = Status.FAILED
    state.error = str(exc)
    state.counts = None
    logger.info("Load failed -> failed (%s)", state.error)
    return state


def select_date(state: DashboardState, day: Optional[str]) -> bool:
    """
    Calendar pick or bubble click. Only dates present in the data are accepted;
    anything else leaves the state untouched. Returns True when the selection moved.
    """
    if state.status is not Status.IDLE:
        logger.warning("Ignoring selection %r while %s", day, state.status.value)
        return False

    canonical = normalize_date(day) if day else None
    if canonical is None or canonical not in state.dates:
        logger.warning("Ignoring selection of unavailable date %r", day)
        return False

    changed = canonical != state.selected_date
    state.selected_date = canonical
    refresh_counts(state)
    if changed:
        logger.info("Selected %s", canonical)
    return changed
