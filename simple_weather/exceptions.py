"""Exception hierarchy for SimpleWeather with HTTP status codes and user-facing titles."""

from enum import Enum
from typing import Any

from simple_weather.models.weather import ApiError, ApiErrorKind

DEFAULT_TITLE = "Error"
LOCATION_TITLE = "Location Access Required"

MISSING_API_KEY_MESSAGE = "API Key is missing"
MALFORMED_RESPONSE_MESSAGE = "Unexpected response format."
EMPTY_CITY_MESSAGE = "Please enter a city name."
LOCATION_DENIED_MESSAGE = "Location access was denied. Please enable it in Settings."
LOCATION_PERMISSION_MESSAGE = "Please enable location services in Settings to use this feature."
LOCATION_UNAVAILABLE_MESSAGE = "The location could not be determined. Try again later."
LOCATION_GENERIC_MESSAGE = "Unable to fetch location. Please check your location settings."


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Weather errors
    WEATHER_ERROR = "WEATHER_ERROR"
    MISSING_API_KEY = "MISSING_API_KEY"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    API_REPORTED_ERROR = "API_REPORTED_ERROR"
    INVALID_QUERY = "INVALID_QUERY"

    # Location errors
    LOCATION_ERROR = "LOCATION_ERROR"
    LOCATION_DENIED = "LOCATION_DENIED"
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class SimpleWeatherException(Exception):
    """Base exception for all errors surfaced to the user.

    Every subclass is recovered at the boundary (exception handler or presenter)
    and shown as a titled message; none of them is fatal.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        title: str = DEFAULT_TITLE,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context
            title: Dialog title shown alongside the message
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.title = title
        super().__init__(message)


class WeatherException(SimpleWeatherException):
    """Weather lookup errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class WeatherAPIException(WeatherException):
    """A request to the weather API was attempted (or refused) and failed."""

    kind: ApiErrorKind = ApiErrorKind.NETWORK

    def to_api_error(self) -> ApiError:
        """Describe this failure as an ApiError value."""
        detail = str(self.details.get("detail", self.message))
        reported = self.message if self.kind == ApiErrorKind.API_REPORTED else None
        return ApiError(kind=self.kind, detail=detail, message=reported)


class NetworkFailureException(WeatherAPIException):
    """The request never produced a response."""

    kind = ApiErrorKind.NETWORK

    def __init__(self, detail: str, details: dict[str, Any] | None = None):
        super().__init__(
            detail,
            code=ErrorCode.NETWORK_FAILURE,
            status_code=502,
            details={"detail": detail, **(details or {})},
        )


class MalformedResponseException(WeatherAPIException):
    """The response body was not a JSON object we can read."""

    kind = ApiErrorKind.MALFORMED_RESPONSE

    def __init__(self, detail: str = "", details: dict[str, Any] | None = None):
        super().__init__(
            MALFORMED_RESPONSE_MESSAGE,
            code=ErrorCode.MALFORMED_RESPONSE,
            status_code=502,
            details={"detail": detail or MALFORMED_RESPONSE_MESSAGE, **(details or {})},
        )


class ApiReportedException(WeatherAPIException):
    """The weather API answered with its own error message."""

    kind = ApiErrorKind.API_REPORTED

    def __init__(
        self,
        message: str,
        api_code: int | None = None,
        code: ErrorCode = ErrorCode.API_REPORTED_ERROR,
        status_code: int | None = None,
    ):
        if status_code is None:
            status_code = 404 if api_code == 404 else 502
        super().__init__(
            message,
            code=code,
            status_code=status_code,
            details={"detail": message, "api_code": api_code},
        )
        self.api_code = api_code


class MissingApiKeyException(ApiReportedException):
    """No API key configured; raised before any network call."""

    def __init__(self):
        super().__init__(MISSING_API_KEY_MESSAGE, code=ErrorCode.MISSING_API_KEY, status_code=500)


class InvalidQueryException(WeatherException):
    """The query cannot be sent (blank city, out-of-range coordinates)."""

    def __init__(self, message: str = EMPTY_CITY_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.INVALID_QUERY, status_code=422, details=details)


class LocationException(SimpleWeatherException):
    """Location could not be obtained."""

    def __init__(
        self,
        message: str = LOCATION_GENERIC_MESSAGE,
        code: ErrorCode = ErrorCode.LOCATION_ERROR,
        status_code: int = 503,
        title: str = DEFAULT_TITLE,
    ):
        super().__init__(message, code, status_code, title=title)


class LocationDeniedException(LocationException):
    """The user refused location access."""

    def __init__(self, message: str = LOCATION_DENIED_MESSAGE, title: str = DEFAULT_TITLE):
        super().__init__(message, code=ErrorCode.LOCATION_DENIED, status_code=403, title=title)


class LocationUnavailableException(LocationException):
    """Access was granted but no fix could be determined."""

    def __init__(self, message: str = LOCATION_UNAVAILABLE_MESSAGE):
        super().__init__(message, code=ErrorCode.LOCATION_UNAVAILABLE, status_code=503)


class ConfigurationException(SimpleWeatherException):
    """Configuration errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CONFIG_ERROR, status_code=500, details=details)
