import asyncio
import time
from dataclasses import dataclass

import pytest

from dashboards.network_health.data_generator import GenerationError
from dashboards.network_health.models import HealthSample, SampleSequence

BASE_TIMESTAMP = 1_700_000_000_000


def make_sample(timestamp, **overrides):
    values = {
        "active_addresses": 120_000,
        "transaction_count": 400_000,
        "average_block_time": 12.5,
        "network_hash_rate": 120_000_000,
        "difficulty": 1_500_000,
        "fees": 5.0,
    }
    values.update(overrides)
    return HealthSample(timestamp=timestamp, **values)


def wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def make_sequence():
    """Build a sequence with one sample per dict of field overrides"""
    def _make(*overrides, network="bitcoin", timeframe="24h", step_ms=3_600_000):
        samples = [
            make_sample(BASE_TIMESTAMP + i * step_ms, **values)
            for i, values in enumerate(overrides)
        ]
        return SampleSequence(network=network, timeframe=timeframe, samples=samples)
    return _make


@dataclass
class PendingCall:
    network: str
    timeframe: str
    future: asyncio.Future

    def succeed(self, sequence):
        self.future.set_result(sequence)

    def fail(self, message="Network error: Failed to fetch data"):
        self.future.set_exception(GenerationError(message))


class ManualGenerator:
    """Generator whose calls stay pending until the test resolves them"""

    def __init__(self):
        self.calls = []

    async def generate(self, network, timeframe):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(network, timeframe, future))
        return await future


@pytest.fixture
def manual_generator():
    return ManualGenerator()


@pytest.fixture
def settle():
    """Let scheduled tasks and callbacks run"""
    async def _settle(rounds=5):
        for _ in range(rounds):
            await asyncio.sleep(0)
    return _settle
