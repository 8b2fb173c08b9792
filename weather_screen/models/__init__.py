"""Weather Screen models"""

from weather_screen.models.base_models import DetailedHealthResponse, HealthResponse
from weather_screen.models.view_state import Error, Loaded, Loading, QuerySubmission, ScreenSnapshot, ViewState
from weather_screen.models.weather import ForecastDay, HGWeatherPayload, WeatherReport

__all__ = [
    "DetailedHealthResponse",
    "HealthResponse",
    "Error",
    "Loaded",
    "Loading",
    "QuerySubmission",
    "ScreenSnapshot",
    "ViewState",
    "ForecastDay",
    "HGWeatherPayload",
    "WeatherReport",
]
