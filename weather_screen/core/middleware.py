"""Middleware configuration."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from weather_screen.config import Settings
from weather_screen.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def split_csv(value: str) -> list[str]:
    """Split a comma-separated setting into its non-empty, stripped parts."""
    return [part.strip() for part in value.split(",") if part.strip()]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    cors_origins = split_csv(settings.cors_origins)
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        event_type="security_config",
        origins=cors_origins,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Trusted hosts - prevent host header injection
    trusted_hosts = split_csv(settings.trusted_hosts)
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    # Only routes decorated with @limiter.limit are limited; the fragment is polled freely
    app.state.limiter = Limiter(key_func=get_remote_address)

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        """Count total requests for the readiness endpoint."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        return await call_next(request)
