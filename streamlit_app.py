"""Streamlit entrypoint: `streamlit run streamlit_app.py`."""

import streamlit as st

from ui.clean_orders_ui import render_clean_orders_ui

st.set_page_config(page_title="Order cleaner", layout="wide")
render_clean_orders_ui()
