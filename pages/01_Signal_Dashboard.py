# pages/01_Signal_Dashboard.py
from __future__ import annotations

import streamlit as st

from app_core.config import settings
from app_core.errors import SignalLoadError
from app_core.loaders.signal_csv import fetch_signal_csv, load_signal_dataset
from app_core.analysis.selection import (
    STATE_KEY,
    DashboardState,
    Status,
    apply_failed,
    apply_loaded,
    select_date,
)
from app_core.analysis.signal_views import (
    axis_labels,
    chart_points,
    recent_window,
    signal_color,
    window_stats,
)
from app_core.analysis.calendar_grid import default_month, month_grid, months_with_data, weekday_headers
from app_core.charts.signal_figures import build_bubble_figure, build_gauge_figure, clicked_date

BUBBLE_REV_KEY = "bubble_rev"

st.title("SellSmart Lamp")
st.caption(f"Daily buy / hold / sell signals per indicator · last {settings.recent_days} days in the matrix.")


# Data loader (Streamlit caching stays in the page)
@st.cache_data(ttl=settings.cache_ttl, show_spinner=False)
def get_csv_text(url: str) -> str:
    return fetch_signal_csv(url)


def reset_session():
    get_csv_text.clear()
    st.session_state[STATE_KEY] = DashboardState()
    st.session_state[BUBBLE_REV_KEY] = 0


state: DashboardState = st.session_state.setdefault(STATE_KEY, DashboardState())

if state.loading:
    with st.spinner("Loading signal data…"):
        try:
            apply_loaded(state, load_signal_dataset(settings.csv_url, fetch=get_csv_text))
        except SignalLoadError as exc:
            apply_failed(state, exc)

if state.status is Status.FAILED:
    st.error(f"Error: {state.error}")
    if st.button("Reload data", icon=":material/refresh:"):
        reset_session()
        st.rerun()
    st.stop()

if state.status is Status.NO_DATA:
    st.info("No signal data to display.")
    st.stop()


# Gauge + calendar
top_left, top_right = st.columns([3, 1])

with top_left:
    st.subheader("Daily Navigator")
    st.caption(f"Selected date: **{state.selected_date or 'none'}**")
    if not state.selected_date:
        st.info("Select a date on the calendar or click a bubble.")
    elif state.counts is None or state.counts.total == 0:
        st.info("No signal data for the selected date.")
    else:
        c = state.counts
        st.plotly_chart(build_gauge_figure(c, state.selected_date), use_container_width=True)
        m1, m2, m3 = st.columns(3)
        m1.metric("Sell", c.sell)
        m2.metric("Hold", c.hold)
        m3.metric("Buy", c.buy)

with top_right:
    st.subheader("Select Date")
    months = months_with_data(state.dates)
    start_month = default_month(state.dates, state.selected_date)
    year, month = st.selectbox(
        "Month",
        months,
        index=months.index(start_month) if start_month in months else len(months) - 1,
        format_func=lambda ym: f"{ym[0]}-{ym[1]:02d}",
        key=f"cal_month_{state.selected_date}",
        label_visibility="collapsed",
    )

    header = st.columns(7)
    for col, name in zip(header, weekday_headers()):
        col.caption(name)

    for week in month_grid(year, month, state.dates, state.selected_date):
        cols = st.columns(7)
        for col, cell in zip(cols, week):
            if cell is None:
                continue
            clicked = col.button(
                str(cell.day),
                key=f"cal_{cell.iso}",
                disabled=not cell.enabled,
                type="primary" if cell.selected else "secondary",
                use_container_width=True,
            )
            if clicked and select_date(state, cell.iso):
                st.rerun()


# Bubble matrix + window summary
window = recent_window(state.series, settings.recent_days)
points = chart_points(window, state.signal_names)
date_labels, signal_labels = axis_labels(window, state.signal_names)

bottom_left, bottom_right = st.columns([3, 1])

with bottom_left:
    st.subheader("Signal matrix")
    st.caption(
        f"Investment signals for the most recent {settings.recent_days} days. "
        "X: date, Y: indicator. Click a bubble to inspect that day."
    )
    st.markdown(
        f"<span style='color:{signal_color('buy')}'>●</span> Buy &nbsp; "
        f"<span style='color:{signal_color('hold')}'>●</span> Hold &nbsp; "
        f"<span style='color:{signal_color('sell')}'>●</span> Sell",
        unsafe_allow_html=True,
    )
    event = st.plotly_chart(
        build_bubble_figure(points, date_labels, signal_labels, state.selected_date),
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=f"bubble_matrix_{st.session_state.get(BUBBLE_REV_KEY, 0)}",
    )
    picked = clicked_date(event)
    if picked:
        # fresh widget key so the old point selection does not stick around
        st.session_state[BUBBLE_REV_KEY] = st.session_state.get(BUBBLE_REV_KEY, 0) + 1
        select_date(state, picked)
        st.rerun()

with bottom_right:
    stats = window_stats(points, len(window), len(state.signal_names))
    st.subheader("Total")
    st.markdown(
        f"""
- Days shown: **{stats.total_days}**
- Indicators: **{stats.total_signals}**
- <span style='color:{signal_color('sell')}'>Sell</span>: **{stats.sell}**
- Hold: **{stats.hold}**
- <span style='color:{signal_color('buy')}'>Buy</span>: **{stats.buy}**
""",
        unsafe_allow_html=True,
    )
    if state.dropped_rows:
        st.caption(f"{state.dropped_rows} malformed CSV row(s) were skipped.")
    if st.button("Reload data", icon=":material/refresh:"):
        reset_session()
        st.rerun()
