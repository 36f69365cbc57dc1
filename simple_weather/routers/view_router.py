"""Page/view routes for the search page and weather tile fragments."""

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from simple_weather.config import Settings, get_settings
from simple_weather.core.middleware import current_rate_limit, limiter
from simple_weather.dependencies import get_http_client, get_location_provider
from simple_weather.protocols import LocationProvider
from simple_weather.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, settings: Settings = Depends(get_settings)):
    """Render the search page."""
    return TemplateRenderer.render_index(request, settings)


@router.get("/tiles/weather", response_class=HTMLResponse)
@limiter.limit(current_rate_limit)
async def weather_tile(
    request: Request,
    city: str | None = Query(default=None),
    lat: float | None = Query(default=None),
    lon: float | None = Query(default=None),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    provider: LocationProvider = Depends(get_location_provider),
):
    """Render the weather tile for a city, a coordinate pair or the configured location."""
    return await TemplateRenderer.render_weather_tile(request, client, settings, provider, city=city, lat=lat, lon=lon)


@router.get("/tiles/location-error", response_class=HTMLResponse)
async def location_error_tile(request: Request, reason: str = Query(default="other")):
    """Render the message for a browser geolocation failure (denied, unavailable, other)."""
    return TemplateRenderer.render_location_error(request, reason)
