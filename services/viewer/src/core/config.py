from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Metrics API (base url / timeout inherited)
    metrics_api_path: str = "/api/metrics/{agent_id}"

    # Polling
    poll_interval_seconds: float = 5.0
    default_range: str = "1h"

    # Cadence / gaps
    default_interval_seconds: float = 5.0  # used with fewer than two samples
    gap_interval_multiplier: float = 3.0
    gap_min_threshold_seconds: float = 60.0

    # Axis scaling
    axis_headroom: float = 1.05

    # Agent status
    offline_fallback_seconds: float = 120.0
    offline_interval_multiplier: float = 3.0

    otel_service_name: str = "viewer"


settings = Settings()
