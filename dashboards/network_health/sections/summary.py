import streamlit as st
import logging

from config import LOGGER_NAME, METRIC_CARDS
from dashboards.network_health.metrics import derive_all
from utils import METRIC_FORMATTERS, format_percent_change

# Set up logging
logger = logging.getLogger(LOGGER_NAME)


def render_summary_section(sequence):
    """Render a card per metric with its latest value and change since the previous sample"""
    try:
        metrics = derive_all(sequence, fields=tuple(METRIC_CARDS))
    except ValueError as e:
        logger.error(f"Error deriving summary metrics: {str(e)}")
        st.error(f"Error deriving summary metrics: {str(e)}")
        return

    # Key metrics in rows of three
    cols = st.columns(3)
    for i, (field, title) in enumerate(METRIC_CARDS.items()):
        metric = metrics[field]
        with cols[i % 3]:
            st.metric(
                title,
                METRIC_FORMATTERS[field](metric.value),
                delta=format_percent_change(metric),
                delta_color="normal",
                border=True,
            )
