"""Stateless weather API route."""

import httpx
from fastapi import APIRouter, Depends, Query

from weather_screen.config import Settings, get_settings
from weather_screen.dependencies import get_http_client
from weather_screen.models.weather import WeatherReport
from weather_screen.services import weather_service

router = APIRouter()


@router.get(
    "/current",
    response_model=WeatherReport,
    summary="Get current weather and forecast",
    description="""
    Fetches current conditions and the multi-day forecast for a city from
    HG Brasil, without touching the screen state.

    Failures are returned as `{"error": {"code", "message", "details"}}`.
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "city": "Recife, PE",
                        "temp": 28,
                        "description": "Tempo limpo",
                        "humidity": 60,
                        "wind_speedy": "10 km/h",
                        "sunrise": "05:30 am",
                        "sunset": "05:45 pm",
                        "forecast": [
                            {"weekday": "Seg", "date": "01/01", "description": "Tempo nublado", "min": 20, "max": 27}
                        ],
                    }
                }
            },
        },
        403: {"description": "Relay denied access"},
        502: {"description": "Weather API error or malformed payload"},
        504: {"description": "Weather API unreachable or timed out"},
    },
)
async def get_current_weather(
    city: str = Query(min_length=1, max_length=100, pattern=r"\S", description="City, e.g. 'Recife,PE'"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Get weather for ``city``.

    Args:
        city: City query
        client: HTTP client from dependency injection
        settings: Settings from dependency injection

    Returns:
        WeatherReport for the city
    """
    return await weather_service.fetch_weather_report(client, city.strip(), settings)
