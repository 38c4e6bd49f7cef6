from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator
from src.api.router import api_router
from src.core.config import settings
from src.core.logger import configure_logging, get_logger
from src.infrastructure.api.client import MetricsApiClient
from src.services.view_registry import ViewRegistry

# Configure logging once and get service logger
configure_logging()
logger = get_logger("viewer.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "viewer_service_starting",
        extra={"metrics_api": settings.metrics_api_base_url},
    )
    app.state.http = httpx.AsyncClient(
        timeout=settings.metrics_api_timeout_seconds,
        headers={"Accept": "application/json"},
    )
    app.state.registry = ViewRegistry(MetricsApiClient(app.state.http))
    try:
        yield
    finally:
        logger.info("viewer_service_stopping")
        await app.state.registry.close_all()
        await app.state.http.aclose()


app = FastAPI(title="Agent Metrics Viewer", version="0.1.0", lifespan=lifespan)
app.include_router(api_router)

Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/docs", "/openapi.json", "/metrics", "/healthz"],
).instrument(app)


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
