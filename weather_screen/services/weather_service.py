"""Weather service for HG Brasil API integration."""

import httpx
from pydantic import ValidationError

from weather_screen.config import Settings, get_settings
from weather_screen.exceptions import (
    RelayAccessDeniedException,
    WeatherAPIException,
    WeatherNetworkException,
    WeatherPayloadException,
)
from weather_screen.logging_config import get_logger, log_with_context
from weather_screen.middleware.logging_middleware import redact_sensitive_data
from weather_screen.models.weather import HGWeatherPayload, WeatherReport

# cors-anywhere rejects requests that carry neither Origin nor X-Requested-With
RELAY_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
MAX_ERROR_BODY_CHARS = 500

logger = get_logger(__name__)


def build_weather_url(city: str, settings: Settings) -> str:
    """Build the outbound URL for ``city``, prefixed by the relay when one is configured.

    Args:
        city: City query, e.g. "Recife,PE"
        settings: Settings with API key, weather URL and relay prefix

    Returns:
        Absolute URL for a single GET
    """
    target = httpx.URL(settings.weather_api_url, params={"key": settings.weather_api_key, "city_name": city})
    if settings.relay_enabled:
        return f"{settings.relay_url}{target}"
    return str(target)


def parse_weather_payload(data: object) -> WeatherReport:
    """Validate a decoded HG Brasil response and extract the report.

    Raises:
        WeatherAPIException: If the API reported an error in-band
        WeatherPayloadException: If the payload does not have the expected shape
    """
    try:
        payload = HGWeatherPayload.model_validate(data)
    except ValidationError as e:
        raise WeatherPayloadException(
            f"Resposta da API em formato inesperado ({e.error_count()} campos inválidos)",
            details={
                "error_type": "parsing_error",
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        ) from e

    if payload.error:
        raise WeatherAPIException(
            payload.message or "Erro na resposta da API",
            details={"error_type": "api_error"},
        )
    if payload.valid_key is False:
        raise WeatherAPIException(
            "Chave da API de clima inválida",
            status_code=401,
            details={"error_type": "invalid_key"},
        )
    if payload.results is None:
        raise WeatherPayloadException(
            "Resposta da API sem resultados",
            details={"error_type": "parsing_error"},
        )
    return payload.results


async def fetch_weather_report(
    client: httpx.AsyncClient,
    city: str,
    settings: Settings | None = None,
) -> WeatherReport:
    """Fetch current conditions and forecast for ``city``.

    Exactly one GET is issued per call; there are no retries.

    Args:
        client: Shared HTTP client for making requests
        city: City query, e.g. "Recife,PE"
        settings: Settings instance (defaults to singleton)

    Returns:
        Validated WeatherReport

    Raises:
        RelayAccessDeniedException: If the relay refused the request (HTTP 403)
        WeatherAPIException: If the API answered with a non-success status or in-band error
        WeatherNetworkException: If the API could not be reached or timed out
        WeatherPayloadException: If the response is not a well-formed weather payload
    """
    if settings is None:
        settings = get_settings()

    url = build_weather_url(city, settings)
    headers = RELAY_HEADERS if settings.relay_enabled else None

    log_with_context(
        logger,
        "debug",
        "Fetching weather report",
        city=city,
        url=redact_sensitive_data(url),
        via_relay=settings.relay_enabled,
        event_type="weather_fetch",
    )

    try:
        response = await client.get(url, headers=headers, timeout=settings.request_timeout, follow_redirects=True)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        body = e.response.text[:MAX_ERROR_BODY_CHARS]
        if status_code == 403 and settings.relay_enabled:
            raise RelayAccessDeniedException(
                "O servidor de CORS recusou a requisição (HTTP 403)",
                details={"api_response": body},
            ) from e
        raise WeatherAPIException(
            f"Erro na resposta da API (HTTP {status_code})",
            status_code=status_code,
            details={"api_response": body},
        ) from e
    except httpx.TimeoutException as e:
        raise WeatherNetworkException(
            f"A API de clima não respondeu em {settings.request_timeout:g}s",
            details={"error_type": "timeout"},
        ) from e
    except httpx.HTTPError as e:
        raise WeatherNetworkException(
            f"Falha ao buscar dados do clima: {str(e)}",
            details={"error_type": "network_error"},
        ) from e
    except ValueError as e:
        raise WeatherPayloadException(
            "A API de clima retornou um JSON inválido",
            details={"error_type": "parsing_error"},
        ) from e

    return parse_weather_payload(data)
