from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.constants import ChartMetric, RangeToken

# One derived value per sample; None is the missing marker.
Series = List[Optional[float]]


class MetricSample(BaseModel):
    """One reported observation for one agent at one instant."""

    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

    timestamp: datetime
    cpu_percent: float
    cpu_cores: int = Field(default=1, ge=1)
    memory_used: float = Field(ge=0)
    memory_total: float = Field(ge=0)
    disk_used: float = Field(ge=0)
    disk_total: float = Field(ge=0)
    load_avg_1: float = Field(default=0.0, ge=0)
    load_avg_5: float = Field(default=0.0, ge=0)
    load_avg_15: float = Field(default=0.0, ge=0)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Window(BaseModel):
    """Selected range token resolved to an absolute lower bound."""

    model_config = ConfigDict(frozen=True)

    token: RangeToken
    lower_bound: datetime


class ChartSeries(BaseModel):
    """Chart-ready series handed to the rendering front end.

    ``labels`` holds the display string of every timestamp; the same strings
    are meant for axis ticks and point tooltips.
    """

    metric: ChartMetric
    label: str
    timestamps: List[datetime]
    values: Series
    labels: List[str]
    y_min: float = 0.0
    y_max: Optional[float] = None


class AgentSummary(BaseModel):
    """Latest scalar values shown on the summary cards."""

    cpu_percent: float
    cpu_cores: int
    memory_percent: Optional[float]
    disk_percent: Optional[float]
    memory_used_display: str
    memory_total_display: str
    disk_used_display: str
    disk_total_display: str
    load_avg_1: float
    load_avg_5: float
    load_avg_15: float
    status: Literal["online", "offline"]
    last_seen: datetime
    last_seen_display: str


class DashboardSnapshot(BaseModel):
    """Everything one agent view currently displays."""

    agent_id: str
    window: Window
    charts: Dict[ChartMetric, ChartSeries] = Field(default_factory=dict)
    summary: Optional[AgentSummary] = None
    sample_count: int = 0
    expected_interval_seconds: Optional[float] = None
    updated_at: Optional[datetime] = None
    last_error: Optional[str] = None
