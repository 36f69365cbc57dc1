"""SimpleWeather models"""

from simple_weather.models.base_models import DetailedHealthResponse, ErrorBody, ErrorResponse, HealthResponse
from simple_weather.models.presentation import BackgroundKey, IconKey, PresentationKeys, WeatherView
from simple_weather.models.weather import (
    ApiError,
    ApiErrorKind,
    CityQuery,
    Coordinates,
    CoordinatesQuery,
    OpenWeatherPayload,
    WeatherQuery,
    WeatherResult,
)

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "BackgroundKey",
    "CityQuery",
    "Coordinates",
    "CoordinatesQuery",
    "DetailedHealthResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
    "IconKey",
    "OpenWeatherPayload",
    "PresentationKeys",
    "WeatherQuery",
    "WeatherResult",
    "WeatherView",
]
