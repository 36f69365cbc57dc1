"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from simple_weather import __version__
from simple_weather.cache import IconCache
from simple_weather.logging_config import get_logger, log_with_context
from simple_weather.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook: log outgoing requests with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook: log upstream responses with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Build the shared client used for every upstream call."""
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,  # Connection establishment timeout
            read=10.0,  # Read response timeout
            write=5.0,  # Write operation timeout
            pool=5.0,  # Pool checkout timeout
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared HTTP client and icon cache, and close the client on shutdown.

    Exceptions raised while the app runs are logged and re-raised so cleanup
    still happens.
    """
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting SimpleWeather application",
        version=__version__,
        event_type="app_startup",
    )

    client = create_http_client()
    app.state.http_client = client
    app.state.icon_cache = IconCache()
    log_with_context(logger, "info", "HTTP client initialized", event_type="http_client_ready")

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(logger, "info", "Shutting down SimpleWeather application", event_type="app_shutdown")
        await client.aclose()
        log_with_context(logger, "info", "HTTP client closed", event_type="http_client_cleanup")
