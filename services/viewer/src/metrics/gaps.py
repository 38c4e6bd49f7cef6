from datetime import datetime
from typing import Iterable, List, Sequence

from src.core.config import settings
from src.domain.models import Series


def gap_threshold(
    expected_interval: float,
    multiplier: float | None = None,
    minimum: float | None = None,
) -> float:
    """Largest delta in seconds still drawn as a connected line."""
    if multiplier is None:
        multiplier = settings.gap_interval_multiplier
    if minimum is None:
        minimum = settings.gap_min_threshold_seconds
    return max(multiplier * expected_interval, minimum)


def find_gap_indices(timestamps: Sequence[datetime], threshold: float) -> List[int]:
    """Indices of the first sample after each gap.

    The trailing point of a gap is the one suppressed, so no isolated
    segment or hover target is left dangling before the empty span.
    """
    return [
        i
        for i in range(1, len(timestamps))
        if (timestamps[i] - timestamps[i - 1]).total_seconds() > threshold
    ]


def annotate_gaps(series: Series, gap_indices: Iterable[int]) -> Series:
    """Copy of ``series`` with every gap index forced to missing."""
    annotated = list(series)
    for i in gap_indices:
        annotated[i] = None
    return annotated
