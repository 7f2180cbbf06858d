# Supported networks as key-value pairs (id: display settings)
SUPPORTED_NETWORKS = {
    "bitcoin": {"label": "Bitcoin", "color": "#F7931A"},
    "ethereum": {"label": "Ethereum", "color": "#627EEA"},
    "cardano": {"label": "Cardano", "color": "#0033AD"},
    "polkadot": {"label": "Polkadot", "color": "#E6007A"},
    "solana": {"label": "Solana", "color": "#00FFA3"},
    "binance": {"label": "Binance Smart Chain", "color": "#F0B90B"},
}

DEFAULT_NETWORK = "bitcoin"

# Supported timeframes (id: label, number of samples, spacing in milliseconds)
TIMEFRAMES = {
    "1h": {"label": "Last 1 hour", "intervals": 60, "step_ms": 60 * 1000},
    "24h": {"label": "Last 24 hours", "intervals": 24, "step_ms": 60 * 60 * 1000},
    "7d": {"label": "Last 7 days", "intervals": 7, "step_ms": 24 * 60 * 60 * 1000},
    "30d": {"label": "Last 30 days", "intervals": 30, "step_ms": 24 * 60 * 60 * 1000},
}

DEFAULT_TIMEFRAME = "24h"

# Refresh time in seconds (5 minutes)
DEFAULT_REFRESH_TIME = 5 * 60

# Simulated data source behaviour
FAILURE_PROBABILITY = 0.1
SIMULATED_LATENCY = 1.0  # seconds

# Upper bound for a single fetch in seconds (None waits forever)
FETCH_TIMEOUT = None

# Bounds for the random draws, [low, high)
FIELD_RANGES = {
    "active_addresses": (100_000, 150_000),
    "transaction_count": (300_000, 500_000),
    "average_block_time": (10.0, 15.0),
    "network_hash_rate": (100_000_000, 150_000_000),
    "difficulty": (1_000_000, 2_000_000),
    "fees": (1.0, 11.0),
}

# Summary cards, in display order (field: title)
METRIC_CARDS = {
    "active_addresses": "Active Addresses",
    "transaction_count": "Transaction Count",
    "average_block_time": "Average Block Time",
    "network_hash_rate": "Network Hash Rate",
    "difficulty": "Difficulty",
    "fees": "Average Transaction Fees",
}

# How often the page polls the refresh state, in seconds
UI_POLL_INTERVAL = 1

LOGGER_NAME = "network-health-dashboard"
LOG_LEVEL = "INFO"

DASHBOARD_TITLE = "Network Health Monitor"

# A session closes itself after this many seconds without a page poll
SESSION_IDLE_TIMEOUT = 30
SESSION_IDLE_CHECK_INTERVAL = 5
