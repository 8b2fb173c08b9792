"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from weather_screen.state_managers import WeatherScreen


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_weather_screen(request: Request) -> WeatherScreen:
    """
    Get the weather screen state manager from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared WeatherScreen instance.

    Raises:
        RuntimeError: If the weather screen is not initialized.
    """
    screen: WeatherScreen | None = getattr(request.app.state, "weather_screen", None)

    if screen is None:
        raise RuntimeError("Weather screen not initialized.")

    return screen
