from __future__ import annotations

from datetime import datetime, timezone
from typing import List

import httpx
from src.core.config import settings
from src.core.logger import get_logger
from src.domain.errors import MetricsFetchError
from src.domain.models import MetricSample

from .metrics import FETCH_ERRORS_TOTAL, FETCH_LATENCY_SECONDS, FETCH_REQUESTS_TOTAL
from .parser import parse_samples

logger = get_logger("viewer.api_client")


def format_since(lower_bound: datetime) -> str:
    """``since`` query value: UTC ``YYYY-MM-DD HH:MM:SS.mmm``."""
    if lower_bound.tzinfo is None:
        lower_bound = lower_bound.replace(tzinfo=timezone.utc)
    utc = lower_bound.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%d %H:%M:%S.") + f"{utc.microsecond // 1000:03d}"


class MetricsApiClient:
    """Reads agent metric samples from the metrics HTTP API.

    One GET per ``fetch`` call and no retries; the polling schedule is the
    retry mechanism. Only a lower time bound is sent, the server picks the
    aggregation granularity.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None):
        self._http = http_client
        self.base_url = (base_url or settings.metrics_api_base_url).rstrip("/")

    def url_for(self, agent_id: str) -> str:
        path = settings.metrics_api_path.format(agent_id=agent_id)
        return f"{self.base_url}{path}"

    async def fetch(
        self, agent_id: str, lower_bound: datetime, auth_token: str
    ) -> List[MetricSample]:
        FETCH_REQUESTS_TOTAL.inc()
        try:
            with FETCH_LATENCY_SECONDS.time():
                resp = await self._http.get(
                    self.url_for(agent_id),
                    params={"since": format_since(lower_bound)},
                    headers={"Authorization": f"Bearer {auth_token}"},
                    timeout=settings.metrics_api_timeout_seconds,
                )
        except httpx.HTTPError as e:
            FETCH_ERRORS_TOTAL.inc()
            raise MetricsFetchError(agent_id, type(e).__name__) from e

        if not resp.is_success:
            FETCH_ERRORS_TOTAL.inc()
            raise MetricsFetchError(
                agent_id, f"status {resp.status_code}", resp.status_code
            )

        try:
            payload = resp.json()
        except ValueError:
            logger.warning(
                "metrics_response_not_json",
                extra={"agent_id": agent_id, "bytes": len(resp.content)},
            )
            return []
        return parse_samples(payload)
