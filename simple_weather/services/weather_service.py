"""Weather service for OpenWeatherMap API integration."""

from typing import Any

import httpx
from pydantic import ValidationError

from simple_weather.cache import IconCache, cached_icon
from simple_weather.config import Settings
from simple_weather.exceptions import (
    ApiReportedException,
    InvalidQueryException,
    MalformedResponseException,
    MissingApiKeyException,
    NetworkFailureException,
)
from simple_weather.logging_config import get_logger, log_with_context
from simple_weather.middleware.logging_middleware import redact_sensitive_data
from simple_weather.models.weather import CityQuery, CoordinatesQuery, OpenWeatherPayload, WeatherResult

REQUEST_TIMEOUT_SECONDS = 10.0
INVALID_COORDINATES_MESSAGE = "Coordinates are out of range."

logger = get_logger(__name__)


def build_params(query: CityQuery | CoordinatesQuery, settings: Settings) -> dict[str, str]:
    """Build the query string for one lookup: ``q`` or ``lat``/``lon``, plus key and units."""
    params: dict[str, str]
    if isinstance(query, CityQuery):
        params = {"q": query.name}
    else:
        params = {"lat": str(query.lat), "lon": str(query.lon)}
    params["appid"] = settings.weather_api_key
    params["units"] = settings.weather_units
    return params


def parse_weather_body(body: Any) -> WeatherResult:
    """Turn a decoded JSON body into a WeatherResult or raise the matching error.

    The body's ``cod`` decides the outcome, not the HTTP status:

    * not a JSON object -> MalformedResponseException
    * ``cod`` other than 200 with a ``message`` -> ApiReportedException(message)
    * ``cod`` missing with a ``message`` -> ApiReportedException(message)
    * ``cod`` other than 200 without a message -> MalformedResponseException
    * anything else -> WeatherResult, with defaults for absent fields
    """
    if not isinstance(body, dict):
        raise MalformedResponseException(f"Expected a JSON object, got {type(body).__name__}")

    try:
        payload = OpenWeatherPayload.model_validate(body)
    except ValidationError as e:
        raise MalformedResponseException(f"Unreadable weather body: {e.error_count()} invalid field(s)") from e

    if payload.cod != 200:
        if payload.message is not None:
            raise ApiReportedException(payload.message, api_code=payload.cod)
        if payload.cod is not None:
            raise MalformedResponseException(f"API returned cod={payload.cod} without a message")

    return WeatherResult.from_openweather(payload)


async def fetch_weather(
    client: httpx.AsyncClient,
    query: CityQuery | CoordinatesQuery,
    settings: Settings,
) -> WeatherResult:
    """Fetch current weather for one query. Single attempt, no retries.

    Args:
        client: Shared HTTP client for making requests
        query: City or coordinates to look up
        settings: Settings holding the API key and endpoint

    Returns:
        WeatherResult parsed from the response

    Raises:
        MissingApiKeyException: No API key configured (no request is sent)
        NetworkFailureException: The request failed in transport
        MalformedResponseException: The body is not a readable JSON object
        ApiReportedException: The API answered with an error message
    """
    if not settings.weather_api_key:
        log_with_context(logger, "warning", "Weather API key missing", event_type="weather_missing_api_key")
        raise MissingApiKeyException()

    params = build_params(query, settings)

    try:
        response = await client.get(settings.weather_api_url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
    except httpx.HTTPError as e:
        log_with_context(
            logger,
            "warning",
            "Weather request failed",
            query_kind=query.kind,
            error=redact_sensitive_data(str(e)),
            error_type=type(e).__name__,
            event_type="weather_network_error",
        )
        raise NetworkFailureException(str(e) or type(e).__name__, details={"error_type": type(e).__name__}) from e

    try:
        body = response.json()
    except ValueError as e:
        log_with_context(
            logger,
            "warning",
            "Weather response is not JSON",
            status_code=response.status_code,
            event_type="weather_malformed_response",
        )
        raise MalformedResponseException(f"Response body is not valid JSON: {e}") from e

    try:
        result = parse_weather_body(body)
    except ApiReportedException as e:
        log_with_context(
            logger,
            "info",
            "Weather API reported an error",
            api_code=e.api_code,
            api_message=e.message,
            event_type="weather_api_error",
        )
        raise
    except MalformedResponseException as e:
        log_with_context(
            logger,
            "warning",
            "Weather response has unexpected shape",
            detail=e.details.get("detail"),
            event_type="weather_malformed_response",
        )
        raise

    log_with_context(
        logger,
        "info",
        "Weather fetched",
        query_kind=query.kind,
        city=result.city_name,
        condition=result.condition_description,
        event_type="weather_fetch_success",
    )
    return result


async def fetch_by_city(client: httpx.AsyncClient, city: str, settings: Settings) -> WeatherResult:
    """Fetch weather for a typed city name.

    Raises:
        InvalidQueryException: The name is empty after stripping (no request is sent)
    """
    try:
        query = CityQuery(name=city)
    except ValidationError as e:
        raise InvalidQueryException(details={"field": "city"}) from e
    return await fetch_weather(client, query, settings)


async def fetch_by_coordinates(
    client: httpx.AsyncClient,
    lat: float,
    lon: float,
    settings: Settings,
) -> WeatherResult:
    """Fetch weather for a coordinate pair.

    Raises:
        InvalidQueryException: Latitude/longitude out of range or not finite (no request is sent)
    """
    try:
        query = CoordinatesQuery(lat=lat, lon=lon)
    except ValidationError as e:
        raise InvalidQueryException(INVALID_COORDINATES_MESSAGE, details={"lat": str(lat), "lon": str(lon)}) from e
    return await fetch_weather(client, query, settings)


async def fetch_icon(
    client: httpx.AsyncClient,
    icon_code: str,
    settings: Settings,
    cache: IconCache | None = None,
) -> bytes:
    """Download the icon image for ``icon_code``, using ``cache`` when given.

    Raises:
        NetworkFailureException: Transport failure or non-success status
    """

    async def download() -> bytes:
        url = settings.icon_url(icon_code)
        try:
            response = await client.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkFailureException(
                f"Icon request failed (HTTP {e.response.status_code})",
                details={"icon_code": icon_code, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise NetworkFailureException(str(e) or type(e).__name__, details={"icon_code": icon_code}) from e
        return response.content

    if cache is None:
        return await download()
    return await cached_icon(cache, icon_code, settings.icon_cache_ttl_seconds, download)
