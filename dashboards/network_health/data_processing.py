import logging

import polars as pl

from config import LOGGER_NAME
from dashboards.network_health.models import METRIC_FIELDS

# Set up logging
logger = logging.getLogger(LOGGER_NAME)

FRAME_SCHEMA = {
    "timestamp": pl.Int64,
    "active_addresses": pl.Int64,
    "transaction_count": pl.Int64,
    "average_block_time": pl.Float64,
    "network_hash_rate": pl.Int64,
    "difficulty": pl.Int64,
    "fees": pl.Float64,
}


def sequence_to_frame(sequence):
    """Convert a sample sequence into a polars DataFrame for charting

    Adds:
    1. A "time" datetime column derived from the millisecond timestamps
    2. A "network" column so charts can be labelled
    """
    columns = {"timestamp": [sample.timestamp for sample in sequence]}
    for field in METRIC_FIELDS:
        columns[field] = [getattr(sample, field) for sample in sequence]

    df = pl.DataFrame(columns, schema=FRAME_SCHEMA)
    df = df.with_columns(
        # Pin the unit, newer polars returns microseconds from from_epoch
        pl.from_epoch(pl.col("timestamp"), time_unit="ms")
          .cast(pl.Datetime("ms"))
          .alias("time"),
        pl.lit(sequence.network).alias("network"),
    )

    logger.debug(f"Built frame with {df.height} rows for {sequence.network}")
    return df
