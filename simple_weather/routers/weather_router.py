"""Weather API routes."""

import httpx
from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import Response

from simple_weather.cache import IconCache
from simple_weather.config import Settings, get_settings
from simple_weather.core.middleware import current_rate_limit, limiter
from simple_weather.dependencies import get_http_client, get_icon_cache, get_location_provider
from simple_weather.models import ErrorResponse, PresentationKeys, WeatherResult, WeatherView
from simple_weather.protocols import LocationProvider
from simple_weather.services import condition_mapper, location_service, weather_service

router = APIRouter()

ICON_CODE_PATTERN = r"^[0-9]{2}[dn]$"

ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "The weather API does not know the city"},
    422: {"model": ErrorResponse, "description": "Empty city name or coordinates out of range"},
    500: {"model": ErrorResponse, "description": "API key missing"},
    502: {"model": ErrorResponse, "description": "Weather API unreachable or returned an unreadable body"},
}


def _view(result: WeatherResult, settings: Settings) -> WeatherView:
    keys = condition_mapper.presentation_keys_for(result.condition_description)
    return WeatherView.build(result, keys, icon_url=settings.icon_url(result.icon_code))


@router.get(
    "/city",
    response_model=WeatherView,
    summary="Current weather for a city",
    responses=ERROR_RESPONSES,
)
@limiter.limit(current_rate_limit)
async def weather_by_city(
    request: Request,
    q: str = Query(default="", description="City name, e.g. 'Paris' or 'Paris,FR'"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherView:
    """Look up current weather by city name and attach the presentation keys."""
    result = await weather_service.fetch_by_city(client, q, settings)
    return _view(result, settings)


@router.get(
    "/coordinates",
    response_model=WeatherView,
    summary="Current weather for a coordinate pair",
    responses=ERROR_RESPONSES,
)
@limiter.limit(current_rate_limit)
async def weather_by_coordinates(
    request: Request,
    lat: float = Query(..., description="Latitude in degrees (-90..90)"),
    lon: float = Query(..., description="Longitude in degrees (-180..180)"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherView:
    """Look up current weather by latitude/longitude."""
    result = await weather_service.fetch_by_coordinates(client, lat, lon, settings)
    return _view(result, settings)


@router.get(
    "/current-location",
    response_model=WeatherView,
    summary="Current weather for the configured location",
    responses={
        **ERROR_RESPONSES,
        403: {"model": ErrorResponse, "description": "Location access denied"},
        503: {"model": ErrorResponse, "description": "Location could not be determined"},
    },
)
@limiter.limit(current_rate_limit)
async def weather_for_current_location(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    provider: LocationProvider = Depends(get_location_provider),
) -> WeatherView:
    """Look up current weather for the location the provider reports."""
    result = await location_service.fetch_for_current_location(client, provider, settings)
    return _view(result, settings)


@router.get("/conditions", response_model=PresentationKeys, summary="Presentation keys for a description")
async def condition_keys(
    description: str = Query(default="", description="Condition description, e.g. 'light rain'"),
) -> PresentationKeys:
    """Map a condition description to its background and icon keys. No network access."""
    return condition_mapper.presentation_keys_for(description)


@router.get(
    "/icon/{icon_code}",
    response_class=Response,
    summary="Weather icon image",
    responses={200: {"content": {"image/png": {}}}, 502: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
async def weather_icon(
    request: Request,
    icon_code: str = Path(..., pattern=ICON_CODE_PATTERN, description="OpenWeatherMap icon code, e.g. '10d'"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: IconCache = Depends(get_icon_cache),
) -> Response:
    """Proxy the OpenWeatherMap icon image, cached per icon code."""
    image = await weather_service.fetch_icon(client, icon_code, settings, cache)
    return Response(content=image, media_type="image/png")
