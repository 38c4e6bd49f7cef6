from typing import Callable, Dict, Optional, Sequence

from src.domain.models import MetricSample, Series

from shared.constants import ChartMetric


def percent_of(used: float, total: float) -> Optional[float]:
    """``used / total`` as a percentage, None when total is zero."""
    if total == 0:
        return None
    return (used / total) * 100


def _cpu(sample: MetricSample) -> Optional[float]:
    return sample.cpu_percent


def _memory(sample: MetricSample) -> Optional[float]:
    return percent_of(sample.memory_used, sample.memory_total)


def _disk(sample: MetricSample) -> Optional[float]:
    return percent_of(sample.disk_used, sample.disk_total)


def _load(sample: MetricSample) -> Optional[float]:
    # 5m/15m averages are summary fields only
    return sample.load_avg_1


_EXTRACTORS: Dict[ChartMetric, Callable[[MetricSample], Optional[float]]] = {
    ChartMetric.CPU: _cpu,
    ChartMetric.MEMORY: _memory,
    ChartMetric.DISK: _disk,
    ChartMetric.LOAD: _load,
}


def derive_series(samples: Sequence[MetricSample], metric: ChartMetric) -> Series:
    extract = _EXTRACTORS[metric]
    return [extract(s) for s in samples]


def derive_all(samples: Sequence[MetricSample]) -> Dict[ChartMetric, Series]:
    return {metric: derive_series(samples, metric) for metric in ChartMetric.all_metrics()}
