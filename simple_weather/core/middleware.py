"""Middleware configuration."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from simple_weather.config import Settings, get_settings
from simple_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Shared by the route decorators and the RateLimitExceeded handler
limiter = Limiter(key_func=get_remote_address)

# Set by setup_middleware from the settings the app was built with
_rate_limit: str | None = None


def current_rate_limit() -> str:
    """Rate limit for weather routes, evaluated on each request."""
    return _rate_limit or get_settings().rate_limit


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure CORS, rate limiting and request counting.

    Returns:
        The Limiter stored on ``app.state``
    """
    origins = settings.cors_origin_list
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        origins=origins,
        event_type="security_config",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    global _rate_limit
    _rate_limit = settings.rate_limit
    app.state.limiter = limiter
    app.state.rate_limit = settings.rate_limit

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        """Count requests for the readiness endpoint."""
        request.app.state.request_count = getattr(request.app.state, "request_count", 0) + 1
        return await call_next(request)

    return limiter
