"""Protocol definitions for dependency injection."""

from typing import Protocol

from weather_screen.models.weather import WeatherReport


class WeatherFetcher(Protocol):
    """Protocol for fetching a weather report for one city.

    The screen only depends on this call shape, so tests can hand it
    a coroutine function instead of a real HTTP-backed service.
    """

    async def __call__(self, city: str) -> WeatherReport:
        """Fetch the report for ``city``.

        Args:
            city: City query, e.g. "Recife,PE"

        Returns:
            Validated WeatherReport

        Raises:
            WeatherScreenException: If the report could not be fetched
        """
        ...
