# pages/99_About.py
import streamlit as st

from app_core.config import settings

st.title("About this app")

st.markdown(
    f"""
This app reads one CSV of **daily trading signals** (one row per day, one `*{settings.signal_marker}` column per indicator)
and shows:

- a **gauge** for the selected day: needle = `50 + 50·(buy share − sell share)`, clamped to 0–100,
- a **calendar** where only days present in the data can be picked,
- a **bubble matrix** of the last **{settings.recent_days}** days (click a bubble to select its day).
"""
)

st.divider()

st.subheader("Data rules")
st.markdown(
    """
- Dates are normalized to `YYYY-MM-DD`. Accepted: `YYYY-MM-DD`, `YYYYMMDD`, `MM/DD/YYYY`, `YYYY/MM/DD`,
  plus a few other spellings (`2024-3-5`, `Mar 5, 2024`, `5 March 2024`, `2024.03.05`, ISO date-times; English month names only).
- Days that do not exist (e.g. `2023-02-30`) and rows with too few fields are **skipped**, not reported as errors.
- Signal values are read case-insensitively: `buy`, `sell`, everything else (including blank) counts as **hold**.
"""
)

st.subheader("Configuration")
st.markdown(
    """
Set via environment variables (or a local `.env`):
`SIGNAL_CSV_URL`, `RECENT_DAYS_COUNT`, `SIGNAL_MARKER`, `REQUEST_TIMEOUT_SECONDS`, `CSV_CACHE_TTL_SECONDS`, `LOG_LEVEL`.
"""
)

st.caption("Built with Streamlit + Plotly.")
