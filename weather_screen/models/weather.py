"""Pydantic models for weather data."""

from pydantic import BaseModel, ConfigDict, Field


def format_temperature(value: float) -> str:
    """Format a Celsius temperature without a trailing '.0' (28.0 -> '28°C')."""
    return f"{value:g}°C"


class ForecastDay(BaseModel):
    """One day of the HG Brasil forecast."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    weekday: str
    date: str
    description: str
    min: float
    max: float

    @property
    def min_label(self) -> str:
        return format_temperature(self.min)

    @property
    def max_label(self) -> str:
        return format_temperature(self.max)


class WeatherReport(BaseModel):
    """Current conditions plus forecast for one city.

    Immutable once received: a new fetch replaces the whole report.
    Forecast days keep the order the API sent them in.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    city: str
    temp: float
    description: str
    humidity: int = Field(ge=0, le=100)
    wind_speedy: str
    sunrise: str
    sunset: str
    forecast: tuple[ForecastDay, ...]

    @property
    def temp_label(self) -> str:
        return format_temperature(self.temp)

    @property
    def humidity_label(self) -> str:
        return f"{self.humidity}%"


class HGWeatherPayload(BaseModel):
    """Raw HG Brasil /weather response envelope.

    HG reports some failures in-band with a 200 status, either through
    ``error``/``message`` or ``valid_key: false``.
    """

    model_config = ConfigDict(extra="ignore")

    results: WeatherReport | None = None
    valid_key: bool | None = None
    error: bool = False
    message: str | None = None
