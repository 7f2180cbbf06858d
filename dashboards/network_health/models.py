from dataclasses import dataclass, fields
from typing import Iterator, Optional, Tuple

from config import SUPPORTED_NETWORKS, TIMEFRAMES


class InvalidSelectionError(ValueError):
    """Raised when a network or timeframe id is not one of the supported ones."""


def validate_network(network):
    if network not in SUPPORTED_NETWORKS:
        raise InvalidSelectionError(
            f"Unsupported network {network!r}, expected one of {list(SUPPORTED_NETWORKS)}"
        )
    return network


def validate_timeframe(timeframe):
    if timeframe not in TIMEFRAMES:
        raise InvalidSelectionError(
            f"Unsupported timeframe {timeframe!r}, expected one of {list(TIMEFRAMES)}"
        )
    return timeframe


def timeframe_window(timeframe) -> Tuple[int, int]:
    """Return (interval count, step in milliseconds) for a timeframe id"""
    settings = TIMEFRAMES[validate_timeframe(timeframe)]
    return settings["intervals"], settings["step_ms"]


@dataclass(frozen=True)
class HealthSample:
    """Network health metrics at a single point in time"""
    timestamp: int  # epoch milliseconds
    active_addresses: int
    transaction_count: int
    average_block_time: float
    network_hash_rate: int
    difficulty: int
    fees: float


METRIC_FIELDS = tuple(f.name for f in fields(HealthSample) if f.name != "timestamp")


@dataclass(frozen=True)
class SampleSequence:
    """Samples for one network and timeframe, oldest first"""
    network: str
    timeframe: str
    samples: Tuple[HealthSample, ...]

    def __post_init__(self):
        object.__setattr__(self, "samples", tuple(self.samples))
        for earlier, later in zip(self.samples, self.samples[1:]):
            if later.timestamp <= earlier.timestamp:
                raise ValueError(
                    f"Timestamps must be strictly increasing ({earlier.timestamp} >= {later.timestamp})"
                )

    def __len__(self):
        return len(self.samples)

    def __iter__(self) -> Iterator[HealthSample]:
        return iter(self.samples)

    def __getitem__(self, index):
        return self.samples[index]

    @property
    def latest(self) -> Optional[HealthSample]:
        return self.samples[-1] if self.samples else None

    @property
    def previous(self) -> Optional[HealthSample]:
        return self.samples[-2] if len(self.samples) >= 2 else None

    @property
    def timestamps(self):
        return [sample.timestamp for sample in self.samples]
