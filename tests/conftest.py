"""Pytest configuration and shared fixtures."""

import os

# Must be set before the app (and its settings singleton) is imported
os.environ.setdefault("WEATHER_API_KEY", "test-weather-key")
os.environ["TRUSTED_HOSTS"] = "testserver,localhost"

from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from weather_screen.config import Settings  # noqa: E402
from weather_screen.main import app as fastapi_app  # noqa: E402
from weather_screen.models.weather import WeatherReport  # noqa: E402
from weather_screen.routers import screen_router, view_router  # noqa: E402
from weather_screen.state_managers import WeatherScreen  # noqa: E402


class FakeFetcher:
    """Stand-in for the weather service: canned outcomes per city, records calls."""

    def __init__(self):
        self.outcomes: dict[str, WeatherReport | Exception] = {}
        self.calls: list[str] = []

    async def __call__(self, city: str) -> WeatherReport:
        self.calls.append(city)
        outcome = self.outcomes[city]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Give every test a fresh rate limit budget."""
    view_router.limiter.reset()
    screen_router.limiter.reset()
    yield


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values, routed through a relay."""
    return Settings(
        api_host="0.0.0.0",
        api_port=8000,
        weather_api_key="test-weather-key",
        weather_api_url="https://api.hgbrasil.com/weather",
        default_city="Recife,PE",
        request_timeout=5.0,
        relay_url="https://relay.example/",
        relay_access_url="https://relay.example/corsdemo",
    )


@pytest.fixture
def direct_settings(mock_settings):
    """Same as mock_settings but calling the weather API directly."""
    return mock_settings.model_copy(update={"relay_url": ""})


@pytest.fixture
def recife_results():
    """`results` block for Recife with a single forecast day."""
    return {
        "city": "Recife",
        "temp": 28,
        "description": "sol",
        "humidity": 60,
        "wind_speedy": "10 km/h",
        "sunrise": "05:30",
        "sunset": "17:45",
        "forecast": [{"weekday": "Seg", "date": "01/01", "description": "nublado", "min": 20, "max": 27}],
    }


@pytest.fixture
def hg_weather_response(recife_results):
    """Mock HG Brasil /weather response envelope."""
    return {
        "by": "city_name",
        "valid_key": True,
        "results": {
            **recife_results,
            "date": "01/01/2025",
            "time": "10:00",
            "condition_code": "32",
            "currently": "dia",
            "cid": "",
            "img_id": "32",
            "cloudiness": 0.0,
            "rain": 0.0,
            "wind_direction": 90,
            "condition_slug": "clear_day",
            "city_name": "Recife",
        },
        "execution_time": 0.0,
        "from_cache": False,
    }


@pytest.fixture
def recife_report(recife_results):
    return WeatherReport.model_validate(recife_results)


@pytest.fixture
def make_response():
    """Build a real httpx.Response bound to a GET request."""

    def _make(status_code: int = 200, json=None, text: str | None = None) -> httpx.Response:
        request = httpx.Request("GET", "https://relay.example/https://api.hgbrasil.com/weather")
        if json is not None:
            return httpx.Response(status_code, json=json, request=request)
        return httpx.Response(status_code, text=text or "", request=request)

    return _make


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def test_client(fake_fetcher):
    """FastAPI test client with lifespan context and a stubbed weather fetcher."""
    with TestClient(fastapi_app) as client:
        fastapi_app.state.weather_screen = WeatherScreen(fake_fetcher, "Recife,PE")
        yield client
