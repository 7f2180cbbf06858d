import asyncio
import logging
import time

import numpy as np

from config import FAILURE_PROBABILITY, FIELD_RANGES, LOGGER_NAME, SIMULATED_LATENCY
from dashboards.network_health.models import (
    HealthSample,
    METRIC_FIELDS,
    SampleSequence,
    timeframe_window,
    validate_network,
)

# Set up logging
logger = logging.getLogger(LOGGER_NAME)

INTEGER_FIELDS = ("active_addresses", "transaction_count", "network_hash_rate", "difficulty")


class GenerationError(Exception):
    """Raised when the (simulated) upstream source fails to deliver data"""


class SampleGenerator:
    def __init__(self, failure_probability=FAILURE_PROBABILITY, latency=SIMULATED_LATENCY,
                 field_ranges=None, rng=None, clock=None):
        """
        Simulated source of network health samples.

        Args:
            failure_probability: Chance in [0, 1] that a call raises GenerationError
            latency: Seconds to wait before producing a result
            field_ranges: Per-field [low, high) bounds, defaults to FIELD_RANGES
            rng: numpy Generator or seed for the random draws
            clock: Callable returning the current time in seconds
        """
        if not 0 <= failure_probability <= 1:
            raise ValueError("failure_probability must be between 0 and 1")
        if latency < 0:
            raise ValueError("latency must not be negative")

        self.failure_probability = failure_probability
        self.latency = latency
        self.field_ranges = dict(FIELD_RANGES if field_ranges is None else field_ranges)
        missing = [name for name in METRIC_FIELDS if name not in self.field_ranges]
        if missing:
            raise ValueError(f"Missing ranges for fields: {missing}")

        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.clock = clock or time.time

    async def generate(self, network, timeframe) -> SampleSequence:
        """
        Produce a sequence of samples for the given network and timeframe.

        The network only selects presentation downstream, it does not shape the values.

        Raises:
            InvalidSelectionError: If network or timeframe is not supported
            GenerationError: With probability failure_probability
        """
        validate_network(network)
        intervals, step_ms = timeframe_window(timeframe)

        if self.latency:
            await asyncio.sleep(self.latency)

        if self.rng.random() < self.failure_probability:
            logger.warning(f"Simulated failure fetching {network} data for {timeframe}")
            raise GenerationError("Network error: Failed to fetch data")

        now = int(self.clock() * 1000)
        columns = {name: self._draw(name, intervals) for name in METRIC_FIELDS}

        samples = []
        for position, i in enumerate(range(intervals - 1, -1, -1)):
            values = {name: column[position].item() for name, column in columns.items()}
            samples.append(HealthSample(timestamp=now - i * step_ms, **values))

        logger.debug(f"Generated {len(samples)} samples for {network} ({timeframe})")
        return SampleSequence(network=network, timeframe=timeframe, samples=samples)

    def _draw(self, name, size):
        low, high = self.field_ranges[name]
        if name in INTEGER_FIELDS:
            return self.rng.integers(int(low), int(high), size=size)
        return self.rng.uniform(low, high, size=size)
