# app.py
from pathlib import Path
import streamlit as st

from app_core.config import settings
from app_core.log import setup_logging

setup_logging(settings.log_level)

st.set_page_config(page_title="SellSmart Lamp – Signal Dashboard", page_icon="🚦", layout="wide")

pages: dict[str, list] = {}

# Helper to add pages
def add(section: str, path: str, title: str, icon: str):
    if Path(path).exists():
        pages.setdefault(section, []).append(st.Page(path, title=title, icon=icon))


add("Signals", "pages/01_Signal_Dashboard.py", "Dashboard", ":material/dashboard:")
add("Signals", "pages/02_Data_Table.py", "Data Table", ":material/table_chart:")
add("Overview", "pages/99_About.py", "About", ":material/info:")


pg = st.navigation(pages, position="sidebar", expanded=True)
pg.run()
