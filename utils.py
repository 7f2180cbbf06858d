import logging
from datetime import datetime

from config import LOGGER_NAME, LOG_LEVEL

# Set up logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(LOGGER_NAME)


def format_count(n):
    """Format an integer count with thousands separators"""
    return f"{n:,.0f}"


def format_seconds(n):
    """Format a block time in seconds for display"""
    return f"{n:.2f}s"


def format_hash_rate(n):
    """Format a hash rate in MH/s"""
    return f"{n / 1_000_000:.2f} MH/s"


def format_usd(n):
    return f"${n:.2f}"


def format_percent_change(metric):
    """Format a derived metric's change as a signed percentage for st.metric deltas

    The sign drives the up/down arrow and colour of the card.
    """
    sign = "-" if metric.direction == "down" else "+"
    return f"{sign}{abs(metric.percent_change):.2f}%"


def format_timestamp(ms):
    """Format epoch milliseconds as a local date and time"""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


# Display formatter per metric field
METRIC_FORMATTERS = {
    "active_addresses": format_count,
    "transaction_count": format_count,
    "average_block_time": format_seconds,
    "network_hash_rate": format_hash_rate,
    "difficulty": format_count,
    "fees": format_usd,
}
