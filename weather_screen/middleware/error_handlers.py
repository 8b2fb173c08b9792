"""JSON error responses for the API routes.

A ``WeatherScreenException`` raised by a route (the stateless weather
endpoint, for instance) becomes ``{"error": {"code", "message", "details"}}``
with the exception's own status. The screen routes never reach these
handlers for weather failures: those become an ``Error`` view state instead.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from weather_screen.exceptions import ErrorCode, WeatherScreenException
from weather_screen.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def error_body(code: str, message: str, details: dict | None = None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


async def weather_screen_exception_handler(request: Request, exc: WeatherScreenException) -> JSONResponse:
    log_with_context(
        logger,
        "warning",
        "Weather request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        event_type="weather_screen_error",
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code.value, exc.message, exc.details),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and answer a bare 500 with no internal detail."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_body(ErrorCode.INTERNAL_ERROR.value, "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WeatherScreenException, weather_screen_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, general_exception_handler)
