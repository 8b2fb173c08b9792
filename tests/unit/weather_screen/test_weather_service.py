"""Unit tests for weather service."""

import httpx
import pytest

from weather_screen.exceptions import (
    ErrorCode,
    RelayAccessDeniedException,
    WeatherAPIException,
    WeatherNetworkException,
    WeatherPayloadException,
)
from weather_screen.models.weather import WeatherReport
from weather_screen.services import weather_service


def test_build_weather_url_through_relay(mock_settings):
    """Test the relay prefix is prepended to the full weather URL."""
    url = weather_service.build_weather_url("Recife,PE", mock_settings)

    assert url.startswith("https://relay.example/https://api.hgbrasil.com/weather?")
    target = httpx.URL(url.removeprefix("https://relay.example/"))
    assert target.params["key"] == "test-weather-key"
    assert target.params["city_name"] == "Recife,PE"


def test_build_weather_url_direct(direct_settings):
    """Test an empty relay_url calls the weather API directly."""
    url = httpx.URL(weather_service.build_weather_url("São Paulo,SP", direct_settings))

    assert url.host == "api.hgbrasil.com"
    assert url.params["city_name"] == "São Paulo,SP"


@pytest.mark.asyncio
async def test_fetch_weather_report_success(mock_http_client, mock_settings, hg_weather_response, make_response):
    """Test successful weather data fetch."""
    mock_http_client.get.return_value = make_response(200, json=hg_weather_response)

    result = await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert isinstance(result, WeatherReport)
    assert result.city == "Recife"
    assert result.temp == 28
    assert result.humidity == 60
    assert result.wind_speedy == "10 km/h"
    assert [day.weekday for day in result.forecast] == ["Seg"]

    mock_http_client.get.assert_called_once()
    call_args = mock_http_client.get.call_args
    assert "city_name=" in call_args.args[0]
    assert call_args.kwargs["timeout"] == mock_settings.request_timeout
    assert call_args.kwargs["headers"] == weather_service.RELAY_HEADERS


@pytest.mark.asyncio
async def test_fetch_weather_report_direct_sends_no_relay_headers(
    mock_http_client, direct_settings, hg_weather_response, make_response
):
    """Test direct calls do not send the relay header."""
    mock_http_client.get.return_value = make_response(200, json=hg_weather_response)

    await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", direct_settings)

    assert mock_http_client.get.call_args.kwargs["headers"] is None


@pytest.mark.asyncio
async def test_fetch_weather_report_api_error(mock_http_client, mock_settings, make_response):
    """Test weather API returns error status."""
    mock_http_client.get.return_value = make_response(500, text="Internal Server Error")

    with pytest.raises(WeatherAPIException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == ErrorCode.WEATHER_API_ERROR
    assert exc_info.value.message == "Erro na resposta da API (HTTP 500)"
    assert exc_info.value.details["api_response"] == "Internal Server Error"


@pytest.mark.asyncio
async def test_fetch_weather_report_relay_forbidden(mock_http_client, mock_settings, make_response):
    """Test a 403 from the relay is reported as relay access denied."""
    mock_http_client.get.return_value = make_response(403, text="See /corsdemo for more info")

    with pytest.raises(RelayAccessDeniedException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert exc_info.value.code == ErrorCode.RELAY_ACCESS_DENIED
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "O servidor de CORS recusou a requisição (HTTP 403)"


@pytest.mark.asyncio
async def test_fetch_weather_report_forbidden_without_relay(mock_http_client, direct_settings, make_response):
    """Test a 403 without a relay is a plain API error."""
    mock_http_client.get.return_value = make_response(403, text="Forbidden")

    with pytest.raises(WeatherAPIException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", direct_settings)

    assert not isinstance(exc_info.value, RelayAccessDeniedException)
    assert exc_info.value.code == ErrorCode.WEATHER_API_ERROR


@pytest.mark.asyncio
async def test_fetch_weather_report_network_error(mock_http_client, mock_settings):
    """Test network error during weather fetch."""
    mock_http_client.get.side_effect = httpx.ConnectError("Connection failed")

    with pytest.raises(WeatherNetworkException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert exc_info.value.details["error_type"] == "network_error"
    assert "Falha ao buscar dados do clima" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_weather_report_timeout(mock_http_client, mock_settings):
    """Test timeout during weather fetch."""
    mock_http_client.get.side_effect = httpx.ReadTimeout("Request timed out")

    with pytest.raises(WeatherNetworkException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert exc_info.value.details["error_type"] == "timeout"
    assert "5s" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_weather_report_invalid_json(mock_http_client, mock_settings, make_response):
    """Test a non-JSON body is a payload error."""
    mock_http_client.get.return_value = make_response(200, text="<html>not json</html>")

    with pytest.raises(WeatherPayloadException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert exc_info.value.code == ErrorCode.WEATHER_PAYLOAD_ERROR


@pytest.mark.asyncio
async def test_fetch_weather_report_missing_fields(mock_http_client, mock_settings, make_response):
    """Test a payload missing required fields is rejected before reaching the screen."""
    mock_http_client.get.return_value = make_response(200, json={"results": {"city": "Recife", "temp": 28}})

    with pytest.raises(WeatherPayloadException) as exc_info:
        await weather_service.fetch_weather_report(mock_http_client, "Recife,PE", mock_settings)

    assert "formato inesperado" in str(exc_info.value)
    assert exc_info.value.details["errors"]


def test_parse_weather_payload_without_results():
    """Test an envelope with no results is a payload error."""
    with pytest.raises(WeatherPayloadException):
        weather_service.parse_weather_payload({"by": "default"})


def test_parse_weather_payload_not_an_object():
    """Test a JSON array is a payload error."""
    with pytest.raises(WeatherPayloadException):
        weather_service.parse_weather_payload([1, 2, 3])


def test_parse_weather_payload_in_band_error():
    """Test HG's in-band error flag is surfaced with its message."""
    with pytest.raises(WeatherAPIException) as exc_info:
        weather_service.parse_weather_payload({"error": True, "message": "Limite de requisições atingido"})

    assert exc_info.value.message == "Limite de requisições atingido"


def test_parse_weather_payload_invalid_key(hg_weather_response):
    """Test valid_key: false is treated as a rejected key."""
    hg_weather_response["valid_key"] = False

    with pytest.raises(WeatherAPIException) as exc_info:
        weather_service.parse_weather_payload(hg_weather_response)

    assert exc_info.value.status_code == 401


def test_parse_weather_payload_keeps_forecast_order(hg_weather_response):
    """Test forecast days keep the order the API sent them in."""
    hg_weather_response["results"]["forecast"] = [
        {"weekday": "Qua", "date": "03/01", "description": "chuva", "min": 21, "max": 25},
        {"weekday": "Seg", "date": "01/01", "description": "sol", "min": 22, "max": 30},
        {"weekday": "Ter", "date": "02/01", "description": "nublado", "min": 20, "max": 27},
    ]

    report = weather_service.parse_weather_payload(hg_weather_response)

    assert [day.date for day in report.forecast] == ["03/01", "01/01", "02/01"]
