from typing import Dict, Sequence

from src.domain.models import ChartSeries, MetricSample
from src.metrics.derived import derive_all
from src.metrics.formatting import TimestampFormatter
from src.metrics.gaps import annotate_gaps, find_gap_indices, gap_threshold
from src.metrics.interval import estimate_interval
from src.metrics.scaling import AXIS_LOWER_BOUND, axis_upper_bound

from shared.constants import ChartMetric


def build_charts(
    samples: Sequence[MetricSample],
    formatter: TimestampFormatter,
    expected_interval: float | None = None,
) -> Dict[ChartMetric, ChartSeries]:
    """Turn one ordered sample sequence into chart-ready series.

    Every chart shares the timestamp sequence and the gap indices, so all
    of them break at the same points.
    """
    timestamps = [s.timestamp for s in samples]
    if expected_interval is None:
        expected_interval = estimate_interval(timestamps)
    gaps = find_gap_indices(timestamps, gap_threshold(expected_interval))
    labels = [formatter.axis_tick(t) for t in timestamps]

    charts: Dict[ChartMetric, ChartSeries] = {}
    for metric, series in derive_all(samples).items():
        values = annotate_gaps(series, gaps)
        charts[metric] = ChartSeries(
            metric=metric,
            label=metric.label,
            timestamps=timestamps,
            values=values,
            labels=labels,
            y_min=AXIS_LOWER_BOUND,
            y_max=axis_upper_bound(values),
        )
    return charts
