import streamlit as st
import logging
from config import (
    SUPPORTED_NETWORKS, TIMEFRAMES, DEFAULT_NETWORK, DEFAULT_TIMEFRAME,
    DEFAULT_REFRESH_TIME, DASHBOARD_TITLE, LOGGER_NAME
)
from dashboards.network_health.main import render
from dashboards.network_health.models import InvalidSelectionError, validate_network, validate_timeframe

logger = logging.getLogger(LOGGER_NAME)

# Set page config
st.set_page_config(page_title=DASHBOARD_TITLE, layout="wide")

# Get URL parameters
query_params = st.query_params


def selection_from_params(key, validate, default):
    """Read a selection from the URL, falling back to the default when it is missing or unsupported"""
    if key not in query_params:
        return default
    try:
        return validate(query_params[key])
    except InvalidSelectionError as e:
        logger.warning(f"Ignoring {key} URL parameter: {str(e)}")
        return default


# Initialize session state for global settings
if "network" not in st.session_state:
    st.session_state.network = selection_from_params("network", validate_network, DEFAULT_NETWORK)
if "timeframe" not in st.session_state:
    st.session_state.timeframe = selection_from_params("timeframe", validate_timeframe, DEFAULT_TIMEFRAME)


def update_url_params():
    st.query_params["network"] = st.session_state.network
    st.query_params["timeframe"] = st.session_state.timeframe


st.sidebar.title("Network Health")

# Add global settings in sidebar
st.sidebar.subheader("Global Settings")

# Network selection
network_ids = list(SUPPORTED_NETWORKS.keys())
selected_network = st.sidebar.selectbox(
    "Network",
    network_ids,
    index=network_ids.index(st.session_state.network),
    format_func=lambda network: SUPPORTED_NETWORKS[network]["label"],
)

# Update session state and URL if network changed
if selected_network != st.session_state.network:
    st.session_state.network = selected_network
    update_url_params()
    st.rerun()

# Timeframe selection
timeframe_ids = list(TIMEFRAMES.keys())
selected_timeframe = st.sidebar.selectbox(
    "Timeframe",
    timeframe_ids,
    index=timeframe_ids.index(st.session_state.timeframe),
    format_func=lambda timeframe: TIMEFRAMES[timeframe]["label"],
)

# Update session state and URL if timeframe changed
if selected_timeframe != st.session_state.timeframe:
    st.session_state.timeframe = selected_timeframe
    update_url_params()
    st.rerun()

st.sidebar.caption(f"Data refreshes automatically every {DEFAULT_REFRESH_TIME // 60} minutes.")

# Display version info
st.sidebar.markdown("---")
st.sidebar.markdown("*Network Health Monitor v0.1*")

render()
