"""Exception handlers for the application."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from simple_weather.exceptions import ErrorCode, SimpleWeatherException
from simple_weather.logging_config import get_logger, log_with_context
from simple_weather.models.base_models import ErrorBody, ErrorResponse

logger = get_logger(__name__)


def error_response(exc: SimpleWeatherException) -> ErrorResponse:
    """Build the ``{"error": {...}}`` body for an exception."""
    return ErrorResponse(
        error=ErrorBody(code=exc.code.value, title=exc.title, message=exc.message, details=exc.details)
    )


async def simple_weather_exception_handler(request: Request, exc: SimpleWeatherException) -> JSONResponse:
    """Render known errors with their status code, title and message."""
    log_with_context(
        logger,
        "warning",
        "Request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        path=request.url.path,
        event_type="weather_app_error",
    )
    return JSONResponse(status_code=exc.status_code, content=error_response(exc).model_dump(mode="json"))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and answer with a generic 500."""
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

    body = ErrorResponse(
        error=ErrorBody(code=ErrorCode.INTERNAL_ERROR.value, title="Error", message="Internal server error")
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application."""
    app.add_exception_handler(SimpleWeatherException, simple_weather_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, general_exception_handler)
