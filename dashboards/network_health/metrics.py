from dataclasses import dataclass

from dashboards.network_health.models import METRIC_FIELDS


@dataclass(frozen=True)
class DerivedMetric:
    field: str
    value: float
    previous_value: float
    percent_change: float
    direction: str  # "up" or "down"


def percent_change(value, previous_value):
    """Percent change from previous_value to value, 0 when previous_value is 0"""
    if previous_value == 0:
        return 0.0
    return (value - previous_value) / previous_value * 100


def derive(sequence, field) -> DerivedMetric:
    """Compare the latest sample of a field against the one before it

    With a single sample the previous value is the latest value itself,
    so the change is 0 and the direction is "up".
    """
    if field not in METRIC_FIELDS:
        raise ValueError(f"Unknown metric field {field!r}")
    if len(sequence) == 0:
        raise ValueError("Cannot derive a metric from an empty sequence")

    latest = sequence[-1]
    previous = sequence[-2] if len(sequence) >= 2 else latest

    value = getattr(latest, field)
    previous_value = getattr(previous, field)
    change = percent_change(value, previous_value)

    return DerivedMetric(
        field=field,
        value=value,
        previous_value=previous_value,
        percent_change=change,
        direction="up" if change >= 0 else "down",
    )


def derive_all(sequence, fields=METRIC_FIELDS):
    return {field: derive(sequence, field) for field in fields}
