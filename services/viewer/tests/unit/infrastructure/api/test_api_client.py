from datetime import datetime, timezone

import httpx
import pytest
from conftest import BASE_TIME, sample_payload
from src.domain.errors import MetricsFetchError
from src.infrastructure.api.client import MetricsApiClient, format_since


def _client(handler) -> MetricsApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return MetricsApiClient(http, base_url="http://metrics.test/")


def test_format_since_is_utc_with_millis():
    lower = datetime(2024, 3, 1, 13, 0, 0, 123456, tzinfo=timezone.utc)
    assert format_since(lower) == "2024-03-01 13:00:00.123"


def test_url_for_agent():
    client = MetricsApiClient(httpx.AsyncClient(), base_url="http://metrics.test/")
    assert client.url_for("agent-1") == "http://metrics.test/api/metrics/agent-1"


@pytest.mark.asyncio
async def test_fetch_sends_lower_bound_and_bearer_only():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[sample_payload(0), sample_payload(5)])

    samples = await _client(handler).fetch("agent-1", BASE_TIME, "tok123")

    assert len(samples) == 2
    assert seen["path"] == "/api/metrics/agent-1"
    assert seen["params"] == {"since": "2024-03-01 12:00:00.000"}
    assert seen["auth"] == "Bearer tok123"


@pytest.mark.asyncio
async def test_non_success_status_raises():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(MetricsFetchError) as exc:
        await _client(handler).fetch("agent-1", BASE_TIME, "tok")
    assert exc.value.status_code == 503
    assert exc.value.agent_id == "agent-1"


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MetricsFetchError) as exc:
        await _client(handler).fetch("agent-1", BASE_TIME, "tok")
    assert exc.value.status_code is None
    assert exc.value.reason == "ConnectError"


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(MetricsFetchError):
        await _client(handler).fetch("agent-1", BASE_TIME, "tok")


@pytest.mark.asyncio
async def test_empty_or_malformed_body_is_zero_samples():
    bodies = iter([b"", b"not json", b"null", b'{"unexpected": true}'])

    def handler(request):
        return httpx.Response(200, content=next(bodies))

    client = _client(handler)
    for _ in range(4):
        assert await client.fetch("agent-1", BASE_TIME, "tok") == []
