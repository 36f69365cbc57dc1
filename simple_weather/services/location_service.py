"""Location handling: failure classification, fixed-location provider, weather-here lookup."""

from enum import Enum

import httpx

from simple_weather.config import Settings
from simple_weather.exceptions import (
    LOCATION_PERMISSION_MESSAGE,
    LOCATION_TITLE,
    LocationDeniedException,
    LocationException,
    LocationUnavailableException,
)
from simple_weather.logging_config import get_logger, log_with_context
from simple_weather.models.weather import Coordinates, WeatherResult
from simple_weather.protocols import LocationProvider
from simple_weather.services import weather_service

logger = get_logger(__name__)


class LocationFailure(str, Enum):
    """Why a location fix failed, as reported by the provider."""

    DENIED = "denied"
    UNAVAILABLE = "unavailable"
    OTHER = "other"


def location_error_for(failure: LocationFailure | str) -> LocationException:
    """Map a provider failure to the exception carrying its fixed user message.

    Unknown reasons are treated as ``other``.
    """
    try:
        failure = LocationFailure(failure)
    except ValueError:
        failure = LocationFailure.OTHER

    if failure is LocationFailure.DENIED:
        return LocationDeniedException()
    if failure is LocationFailure.UNAVAILABLE:
        return LocationUnavailableException()
    return LocationException()


class StaticLocationProvider:
    """Location provider backed by configured coordinates.

    Permission is always granted; without configured coordinates every fix
    fails as "could not be determined".
    """

    def __init__(self, lat: float | None = None, lon: float | None = None):
        self._coordinates = Coordinates(lat=lat, lon=lon) if lat is not None and lon is not None else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticLocationProvider":
        return cls(settings.default_latitude, settings.default_longitude)

    async def request_permission(self) -> bool:
        return True

    async def request_one_shot_location(self) -> Coordinates:
        if self._coordinates is None:
            raise LocationUnavailableException()
        return self._coordinates


async def fetch_for_current_location(
    client: httpx.AsyncClient,
    provider: LocationProvider,
    settings: Settings,
) -> WeatherResult:
    """Ask ``provider`` for permission and one fix, then fetch weather for it.

    Raises:
        LocationDeniedException: Permission refused
        LocationException: The provider could not produce a fix
        WeatherException: The lookup itself failed
    """
    if not await provider.request_permission():
        log_with_context(logger, "info", "Location permission refused", event_type="location_denied")
        raise LocationDeniedException(LOCATION_PERMISSION_MESSAGE, title=LOCATION_TITLE)

    coordinates = await provider.request_one_shot_location()
    log_with_context(
        logger,
        "debug",
        "Location fix obtained",
        lat=coordinates.lat,
        lon=coordinates.lon,
        event_type="location_fix",
    )
    return await weather_service.fetch_by_coordinates(client, coordinates.lat, coordinates.lon, settings)
