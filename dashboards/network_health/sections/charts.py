import streamlit as st
import logging

from chart_utils import create_themed_area, create_themed_bar, create_themed_line
from config import LOGGER_NAME, SUPPORTED_NETWORKS
from dashboards.network_health.data_processing import sequence_to_frame

# Set up logging
logger = logging.getLogger(LOGGER_NAME)

# (field, chart title, axis title, chart factory)
CHARTS = [
    ("active_addresses", "Active Addresses Over Time", "Active Addresses", create_themed_line),
    ("transaction_count", "Transaction Count Over Time", "Transactions", create_themed_bar),
    ("network_hash_rate", "Network Hash Rate Over Time", "Hash Rate (H/s)", create_themed_area),
    ("fees", "Average Transaction Fees Over Time", "Fees (USD)", create_themed_line),
]


def render_charts_section(sequence):
    """Render the time series charts in the selected network's accent color"""
    color = SUPPORTED_NETWORKS[sequence.network]["color"]

    try:
        # Convert to pandas for Plotly
        df = sequence_to_frame(sequence).to_pandas()
    except Exception as e:
        logger.error(f"Error preparing chart data: {str(e)}")
        st.error(f"Error preparing chart data: {str(e)}")
        return

    cols = st.columns(2)
    for i, (field, title, axis_title, factory) in enumerate(CHARTS):
        with cols[i % 2]:
            try:
                fig = factory(
                    df,
                    x="time",
                    y=field,
                    title=title,
                    xaxis_title="Time",
                    yaxis_title=axis_title,
                    color=color,
                )
                st.plotly_chart(fig, width="stretch", key=f"chart_{field}")
            except Exception as e:
                logger.error(f"Error creating {field} chart: {str(e)}")
                st.error(f"Error creating {title.lower()} chart: {str(e)}")
