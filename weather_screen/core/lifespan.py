"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from weather_screen import __version__
from weather_screen.config import get_settings
from weather_screen.logging_config import get_logger, log_with_context
from weather_screen.middleware.logging_middleware import redact_sensitive_data
from weather_screen.models.weather import WeatherReport
from weather_screen.services import weather_service
from weather_screen.state_managers import WeatherScreen

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client(timeout: float) -> httpx.AsyncClient:
    """Create the shared HTTP client with pooled connections and logging hooks.

    Args:
        timeout: Read timeout in seconds for the weather API

    Returns:
        Configured AsyncClient
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,  # Connection establishment timeout
            read=timeout,  # Read response timeout
            write=5.0,  # Write operation timeout
            pool=5.0,  # Pool checkout timeout
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,  # How long to keep idle connections
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup still runs and the
    error is not swallowed.
    """
    settings = get_settings()
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting Weather Screen application",
        version=__version__,
        via_relay=settings.relay_enabled,
        event_type="app_startup",
    )

    client = create_http_client(settings.request_timeout)
    app.state.http_client = client
    log_with_context(
        logger,
        "info",
        "HTTP client initialized successfully",
        event_type="http_client_ready",
    )

    async def fetch_report(city: str) -> WeatherReport:
        return await weather_service.fetch_weather_report(client, city, settings)

    app.state.weather_screen = WeatherScreen(fetch_report, settings.default_city)
    await app.state.weather_screen.initialize()
    log_with_context(
        logger,
        "info",
        "Weather screen initialized",
        default_city=settings.default_city,
        event_type="state_managers_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Weather Screen application",
            event_type="app_shutdown",
        )

        await app.state.weather_screen.cleanup()

        await client.aclose()
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
