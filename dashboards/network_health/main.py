import streamlit as st
import logging

from config import (
    DASHBOARD_TITLE, LOGGER_NAME, SUPPORTED_NETWORKS, TIMEFRAMES, UI_POLL_INTERVAL
)
from dashboards.network_health.session import DashboardSession
from dashboards.network_health.state import Error, Loading, Ready
from dashboards.network_health.sections import (
    render_summary_section,
    render_charts_section,
    render_loading_section,
    render_error_section,
)
from utils import format_timestamp

# Set up logging
logger = logging.getLogger(LOGGER_NAME)


def get_session(network, timeframe):
    """Return the refresh session for this browser session, opening it on first use"""
    session = st.session_state.get("health_session")
    if session is None or not session.is_open:
        # Closes itself once the page stops polling, Streamlit has no session teardown hook
        session = DashboardSession(network=network, timeframe=timeframe).open()
        st.session_state.health_session = session
    session.touch()
    return session


def render():
    """Render the network health dashboard"""
    st.title(DASHBOARD_TITLE)

    # Get global settings from session state
    network = st.session_state.network
    timeframe = st.session_state.timeframe

    try:
        session = get_session(network, timeframe)
        # Restarts the fetch only when the selection changed
        session.select(network, timeframe)
    except Exception as e:
        logger.error(f"Error starting refresh session: {str(e)}")
        st.error(f"Error starting refresh session: {str(e)}")
        st.exception(e)
        return

    render_state(session)


@st.fragment(run_every=UI_POLL_INTERVAL)
def render_state(session):
    """Poll the session and render whichever state is current"""
    if not session.is_open:
        # Closed while idle, a full rerun opens a fresh one
        st.rerun()

    session.touch()
    state = session.state
    network = SUPPORTED_NETWORKS[state.network]

    st.markdown(
        f"<span style='color:{network['color']}'>●</span> **{network['label']}** · "
        f"{TIMEFRAMES[state.timeframe]['label']}",
        unsafe_allow_html=True,
    )

    if isinstance(state, Loading):
        render_loading_section(state)
        return

    if isinstance(state, Error):
        render_error_section(state, on_retry=session.retry)
        return

    if isinstance(state, Ready):
        try:
            # Summary cards
            render_summary_section(state.sequence)

            # Time series charts
            render_charts_section(state.sequence)
        except Exception as e:
            st.error(f"Error displaying results: {str(e)}")
            st.exception(e)
            return

        # Meta information
        st.markdown(
            f"*{len(state.sequence)} samples. "
            f"Dashboard last refreshed: {format_timestamp(state.sequence.latest.timestamp)}*"
        )
