from datetime import timedelta

from conftest import BASE_TIME, make_sample
from src.metrics.summary import agent_status, build_summary


class TestAgentStatus:
    def test_online_within_three_intervals(self):
        now = BASE_TIME + timedelta(seconds=14)
        assert agent_status(BASE_TIME, 5.0, 10, now) == "online"

    def test_offline_after_three_intervals(self):
        now = BASE_TIME + timedelta(seconds=16)
        assert agent_status(BASE_TIME, 5.0, 10, now) == "offline"

    def test_fallback_with_single_sample(self):
        assert agent_status(BASE_TIME, 5.0, 1, BASE_TIME + timedelta(seconds=100)) == "online"
        assert agent_status(BASE_TIME, 5.0, 1, BASE_TIME + timedelta(seconds=121)) == "offline"


class TestBuildSummary:
    def test_empty_samples(self, utc_formatter):
        assert build_summary([], 5.0, BASE_TIME, utc_formatter) is None

    def test_uses_latest_sample(self, utc_formatter):
        samples = [
            make_sample(0, cpu_percent=1.0),
            make_sample(5, cpu_percent=42.0, load_avg_5=1.5, load_avg_15=2.5),
        ]
        summary = build_summary(samples, 5.0, BASE_TIME + timedelta(seconds=6), utc_formatter)

        assert summary.cpu_percent == 42.0
        assert summary.cpu_cores == 4
        assert summary.memory_percent == 25.0
        assert summary.disk_percent == 25.0
        assert summary.memory_used_display == "2 GB"
        assert summary.memory_total_display == "8 GB"
        assert summary.disk_total_display == "200 GB"
        assert summary.load_avg_5 == 1.5
        assert summary.load_avg_15 == 2.5
        assert summary.status == "online"
        assert summary.last_seen == samples[-1].timestamp
        assert summary.last_seen_display == "2024-03-01 12:00:05"

    def test_zero_totals_give_missing_percentages(self, utc_formatter):
        samples = [make_sample(0, memory_total=0, memory_used=0, disk_total=0, disk_used=0)]
        summary = build_summary(samples, 5.0, BASE_TIME, utc_formatter)
        assert summary.memory_percent is None
        assert summary.disk_percent is None
        assert summary.memory_total_display == "0 B"
