from dataclasses import dataclass
from typing import Union

from dashboards.network_health.models import SampleSequence


@dataclass(frozen=True)
class Loading:
    request_id: int
    network: str
    timeframe: str


@dataclass(frozen=True)
class Error:
    request_id: int
    network: str
    timeframe: str
    message: str


@dataclass(frozen=True)
class Ready:
    request_id: int
    network: str
    timeframe: str
    sequence: SampleSequence


# Exactly one of these is current at any time
FetchState = Union[Loading, Error, Ready]
