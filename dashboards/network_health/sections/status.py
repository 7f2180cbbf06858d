import streamlit as st

from config import SUPPORTED_NETWORKS, TIMEFRAMES


def render_loading_section(state):
    """Shown while a fetch is pending; no stale data is displayed"""
    network = SUPPORTED_NETWORKS[state.network]["label"]
    timeframe = TIMEFRAMES[state.timeframe]["label"].lower()
    st.status(f"Loading {network} data for the {timeframe}...", state="running")


def render_error_section(state, on_retry):
    """Shown after a failed fetch, with a button to run it again"""
    st.error(f"**Error**\n\n{state.message}", icon="🚨")
    if st.button("Retry", key=f"retry_{state.request_id}", type="primary"):
        on_retry()
