"""Template rendering utilities for HTML views."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from weather_screen.config import Settings
from weather_screen.models.view_state import ViewState
from weather_screen.state_managers import WeatherScreen

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def screen_context(state: ViewState | None, settings: Settings) -> dict[str, Any]:
    """Template context for the screen fragment.

    The fragment depends on nothing but the view state and static settings.
    """
    return {
        "state": state,
        "relay_enabled": settings.relay_enabled,
        "relay_access_url": settings.relay_access_url,
    }


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for the weather screen."""

    @staticmethod
    def render_index(request: Request, screen: WeatherScreen, settings: Settings) -> HTMLResponse:
        """Render the full page: search form plus the current screen fragment."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"query": screen.query, **screen_context(screen.state, settings)},
        )

    @staticmethod
    def render_screen(request: Request, state: ViewState | None, settings: Settings) -> HTMLResponse:
        """Render the screen fragment for HTMX swaps.

        Args:
            request: FastAPI request object
            state: Current view state (None before the screen is mounted)
            settings: Settings instance (must be provided by router via Depends)

        Returns:
            HTMLResponse with rendered screen fragment
        """
        return templates.TemplateResponse(request, "screen.html", screen_context(state, settings))

    @staticmethod
    def render_screen_html(state: ViewState | None, settings: Settings) -> str:
        """Render the screen fragment to a string, outside any request."""
        return templates.get_template("screen.html").render(screen_context(state, settings))
