"""Health endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from simple_weather import __version__
from simple_weather.config import Settings, get_settings
from simple_weather.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check for process supervisors."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request, settings: Settings = Depends(get_settings)):
    """Readiness probe - can the application serve weather lookups?

    Checks local prerequisites only, so probing never spends API quota:
    - HTTP client created by the lifespan
    - OpenWeatherMap API key configured

    **Returns:**
    - 200: ready
    - 503: not ready (see ``checks``)
    """
    checks = {
        "http_client": "ok" if getattr(request.app.state, "http_client", None) is not None else "not_initialized",
        "weather_api_key": "ok" if settings.weather_api_key else "missing",
        "default_location": "configured" if settings.has_default_location else "not_configured",
    }
    ready = checks["http_client"] == "ok" and checks["weather_api_key"] == "ok"

    startup_time = getattr(request.app.state, "startup_time", None)
    if startup_time is not None:
        checks["uptime_seconds"] = str(int(time.time() - startup_time))

    return JSONResponse(
        status_code=200 if ready else 503,
        content=DetailedHealthResponse(
            status="ready" if ready else "not_ready",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
