from datetime import datetime, timedelta
from typing import Optional, Sequence

from src.core.config import settings
from src.domain.models import AgentSummary, MetricSample
from src.metrics.derived import percent_of
from src.metrics.formatting import TimestampFormatter, format_bytes


def agent_status(
    last_seen: datetime,
    expected_interval: float,
    sample_count: int,
    now: datetime,
) -> str:
    """Online unless the agent has missed roughly three expected reports.

    With fewer than two samples the cadence is unknown and a fixed fallback
    age is used instead.
    """
    if sample_count < 2 or expected_interval <= 0:
        allowed = settings.offline_fallback_seconds
    else:
        allowed = settings.offline_interval_multiplier * expected_interval
    if now > last_seen + timedelta(seconds=allowed):
        return "offline"
    return "online"


def build_summary(
    samples: Sequence[MetricSample],
    expected_interval: float,
    now: datetime,
    formatter: TimestampFormatter,
) -> Optional[AgentSummary]:
    if not samples:
        return None
    latest = samples[-1]
    return AgentSummary(
        cpu_percent=latest.cpu_percent,
        cpu_cores=latest.cpu_cores,
        memory_percent=percent_of(latest.memory_used, latest.memory_total),
        disk_percent=percent_of(latest.disk_used, latest.disk_total),
        memory_used_display=format_bytes(latest.memory_used),
        memory_total_display=format_bytes(latest.memory_total),
        disk_used_display=format_bytes(latest.disk_used),
        disk_total_display=format_bytes(latest.disk_total),
        load_avg_1=latest.load_avg_1,
        load_avg_5=latest.load_avg_5,
        load_avg_15=latest.load_avg_15,
        status=agent_status(latest.timestamp, expected_interval, len(samples), now),
        last_seen=latest.timestamp,
        last_seen_display=formatter.tooltip(latest.timestamp),
    )
