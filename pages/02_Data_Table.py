# pages/02_Data_Table.py
import streamlit as st

from app_core.analysis.selection import STATE_KEY, DashboardState, Status
from app_core.analysis.signal_views import series_to_frame, display_name

st.title("Data Table (Signals)")
st.caption("The parsed CSV as the dashboard sees it: canonical dates, sorted ascending.")

state = st.session_state.get(STATE_KEY)
st.page_link("pages/01_Signal_Dashboard.py", label="Back to dashboard", icon=":material/dashboard:")

if not isinstance(state, DashboardState) or state.status is not Status.IDLE:
    st.info("Data is not loaded yet. Open the dashboard first.")
    st.stop()

df = series_to_frame(state.series, state.columns)

c1, c2, c3 = st.columns(3)
c1.metric("Rows", f"{len(df):,}")
c2.metric("Indicators", len(state.signal_names))
c3.metric("Skipped rows", state.dropped_rows)

if state.dropped_rows:
    st.caption("Rows with too few fields or an unreadable date are skipped during parsing, not reported as errors.")

with st.sidebar:
    st.header("Table controls")
    show = st.multiselect(
        "Indicators",
        state.signal_names,
        default=state.signal_names,
        format_func=display_name,
    )
    newest_first = st.toggle("Newest first", value=True)

view = df[["date", *show]]
if newest_first:
    view = view.iloc[::-1].reset_index(drop=True)

st.dataframe(view, use_container_width=True, hide_index=True)

st.download_button(
    "Download CSV",
    df.to_csv(index=False).encode("utf-8"),
    file_name="signals_parsed.csv",
    mime="text/csv",
)
