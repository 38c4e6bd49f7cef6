from enum import Enum


class ChartMetric(str, Enum):
    """Charted per-agent series."""

    CPU = "cpu"
    MEMORY = "memory"
    DISK = "disk"
    LOAD = "load"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def all_metrics(cls) -> list["ChartMetric"]:
        return [cls.CPU, cls.MEMORY, cls.DISK, cls.LOAD]


_LABELS = {
    ChartMetric.CPU: "CPU %",
    ChartMetric.MEMORY: "Memory %",
    ChartMetric.DISK: "Disk %",
    ChartMetric.LOAD: "Load",
}
