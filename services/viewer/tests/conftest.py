from datetime import datetime, timedelta, timezone

import pytest
from src.domain.models import MetricSample

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_sample(offset_seconds: float = 0, **overrides) -> MetricSample:
    """Build a MetricSample ``offset_seconds`` after BASE_TIME."""
    fields = {
        "timestamp": BASE_TIME + timedelta(seconds=offset_seconds),
        "cpu_percent": 10.0,
        "cpu_cores": 4,
        "memory_used": 2 * 1024**3,
        "memory_total": 8 * 1024**3,
        "disk_used": 50 * 1024**3,
        "disk_total": 200 * 1024**3,
        "load_avg_1": 0.5,
        "load_avg_5": 0.4,
        "load_avg_15": 0.3,
    }
    fields.update(overrides)
    return MetricSample(**fields)


def sample_payload(offset_seconds: float = 0, **overrides) -> dict:
    """JSON-shaped record as the metrics API returns it."""
    return make_sample(offset_seconds, **overrides).model_dump(mode="json")


class FixedClock:
    """Manually advanced clock for views and summaries."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def utc_formatter():
    from src.metrics.formatting import TimestampFormatter

    return TimestampFormatter(timezone.utc)
