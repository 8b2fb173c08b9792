"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from weather_screen import __version__
from weather_screen.config import get_settings
from weather_screen.core.lifespan import lifespan
from weather_screen.core.middleware import setup_middleware
from weather_screen.middleware.error_handlers import register_error_handlers
from weather_screen.routers import health_router, screen_router, view_router, weather_router

STATIC_DIR = Path(__file__).parent.parent / "static"

# HTML fragments for HTMX, not useful in API docs
HTML_ONLY_PATHS = ("/", "/screen", "/screen/query")


def custom_openapi(app: FastAPI):
    """Generate OpenAPI schema without the HTML page and fragment routes."""
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        license_info=app.license_info,
    )

    paths = openapi_schema.get("paths", {})
    for path in HTML_ONLY_PATHS:
        paths.pop(path, None)

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Weather Screen API",
        description="""
        **Weather Screen** - current weather and forecast for any city (HG Brasil)

        ## Screen
        - `/` - the weather screen (HTML)
        - `GET /api/screen` - current query and view state (`loading`, `error`, `loaded`)
        - `POST /api/screen/query` - submit a city; the screen switches to `loading` immediately

        ## Weather
        - `GET /api/weather/current?city=Recife,PE` - stateless fetch

        ## Health
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe

        ## Rate Limits
        - Query submission: 30 requests/minute per IP
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app, settings)

    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # View routes (HTML page and screen fragment) - no prefix
    app.include_router(view_router.router, tags=["views"])

    app.include_router(health_router.router, tags=["health"])

    # API routes
    app.include_router(screen_router.router, prefix="/api/screen", tags=["screen"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])

    app.openapi = lambda: custom_openapi(app)  # type: ignore[method-assign]

    return app
