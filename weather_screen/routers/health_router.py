"""Health endpoints."""

import time
from datetime import UTC, datetime

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from weather_screen import __version__
from weather_screen.dependencies import get_http_client, get_weather_screen
from weather_screen.models import DetailedHealthResponse, HealthResponse
from weather_screen.state_managers import WeatherScreen

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for Docker healthcheck and basic monitoring.
    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    screen: WeatherScreen = Depends(get_weather_screen),
):
    """Readiness probe - can the application serve traffic?

    Only local state is checked. The weather API is never called here,
    so probes do not spend the relay's request quota.

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: Application is not ready
    """
    checks = {
        "http_client": "failed" if client.is_closed else "ok",
        "weather_screen": screen.state.kind if screen.state is not None else "not_mounted",
        "uptime_seconds": str(int(time.time() - request.app.state.startup_time)),
        "requests_served": str(request.app.state.request_count),
    }
    all_healthy = checks["http_client"] == "ok"

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
