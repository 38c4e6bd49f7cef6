from datetime import datetime
from statistics import median
from typing import List, Sequence

from src.core.config import settings


def timestamp_deltas(timestamps: Sequence[datetime]) -> List[float]:
    """Seconds between consecutive timestamps."""
    return [
        (current - previous).total_seconds()
        for previous, current in zip(timestamps, timestamps[1:])
    ]


def median_delta(deltas: Sequence[float]) -> float:
    # statistics.median averages the two middle values for even counts
    return float(median(deltas))


def estimate_interval(
    timestamps: Sequence[datetime], default_seconds: float | None = None
) -> float:
    """Expected reporting cadence in seconds.

    Median of the consecutive deltas; the configured default when fewer than
    two timestamps are available.
    """
    if default_seconds is None:
        default_seconds = settings.default_interval_seconds
    if len(timestamps) < 2:
        return default_seconds
    return median_delta(timestamp_deltas(timestamps))
