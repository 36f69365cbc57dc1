"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Depends, Request

from simple_weather.cache import IconCache
from simple_weather.config import Settings, get_settings
from simple_weather.protocols import LocationProvider
from simple_weather.services.location_service import StaticLocationProvider


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Raises:
        RuntimeError: If the lifespan has not created the client.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_icon_cache(request: Request) -> IconCache:
    """Get the icon cache from app state."""
    cache: IconCache | None = getattr(request.app.state, "icon_cache", None)

    if cache is None:
        raise RuntimeError("Icon cache not initialized.")

    return cache


async def get_location_provider(settings: Settings = Depends(get_settings)) -> LocationProvider:
    """Location provider for "current location" requests (configured coordinates)."""
    return StaticLocationProvider.from_settings(settings)
