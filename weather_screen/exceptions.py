"""Custom exceptions for Weather Screen with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    WEATHER_SCREEN_ERROR = "WEATHER_SCREEN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Weather errors
    WEATHER_ERROR = "WEATHER_ERROR"
    WEATHER_API_ERROR = "WEATHER_API_ERROR"
    WEATHER_NETWORK_ERROR = "WEATHER_NETWORK_ERROR"
    WEATHER_PAYLOAD_ERROR = "WEATHER_PAYLOAD_ERROR"

    # Relay errors
    RELAY_ACCESS_DENIED = "RELAY_ACCESS_DENIED"


class WeatherScreenException(Exception):
    """Base exception for weather screen errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_SCREEN_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize weather screen exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class WeatherException(WeatherScreenException):
    """Weather service errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class WeatherAPIException(WeatherException):
    """Weather API (or relay) answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        code: ErrorCode = ErrorCode.WEATHER_API_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=code,
            status_code=status_code,
            details=details,
        )


class RelayAccessDeniedException(WeatherAPIException):
    """The CORS relay refused to forward the request."""

    def __init__(
        self,
        message: str = "O servidor de CORS recusou a requisição",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            status_code=403,
            code=ErrorCode.RELAY_ACCESS_DENIED,
            details=details,
        )


class WeatherNetworkException(WeatherException):
    """Weather API could not be reached (connection error or timeout)."""

    def __init__(self, message: str = "Falha ao acessar a API de clima", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_NETWORK_ERROR,
            status_code=504,
            details=details,
        )


class WeatherPayloadException(WeatherException):
    """Weather API answered, but the payload is not a usable weather report."""

    def __init__(self, message: str = "Resposta da API de clima malformada", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_PAYLOAD_ERROR,
            status_code=502,
            details=details,
        )

