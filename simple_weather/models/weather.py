"""Pydantic models for weather queries, OpenWeatherMap payloads and results."""

import math
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

DEFAULT_DESCRIPTION = "N/A"
DEFAULT_CITY_NAME = "Unknown"
DEFAULT_ICON_CODE = "01d"


class CityQuery(BaseModel):
    """Look up weather by city name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    name: str

    @field_validator("name", mode="after")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace and reject empty names."""
        v = v.strip()
        if not v:
            raise ValueError("city name must not be empty")
        return v


class CoordinatesQuery(BaseModel):
    """Look up weather by latitude/longitude."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["coordinates"] = "coordinates"
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False)


WeatherQuery = Annotated[CityQuery | CoordinatesQuery, Field(discriminator="kind")]


class Coordinates(BaseModel):
    """A one-shot location fix."""

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False)


class WeatherInfo(BaseModel):
    """One entry of the ``weather`` array. Missing fields fall back to display defaults."""

    model_config = ConfigDict(extra="ignore")

    description: str = DEFAULT_DESCRIPTION
    icon: str = DEFAULT_ICON_CODE

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        if not isinstance(v, str) or not v:
            return DEFAULT_DESCRIPTION
        return v

    @field_validator("icon", mode="before")
    @classmethod
    def default_icon(cls, v: Any) -> Any:
        if not isinstance(v, str) or not v:
            return DEFAULT_ICON_CODE
        return v


class MainInfo(BaseModel):
    """The ``main`` block; only the temperature is read."""

    model_config = ConfigDict(extra="ignore")

    temp: float = 0.0

    @field_validator("temp", mode="before")
    @classmethod
    def default_temp(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return 0.0
        try:
            v = float(v)
        except OverflowError:
            return 0.0
        return v if math.isfinite(v) else 0.0


class OpenWeatherPayload(BaseModel):
    """Raw OpenWeatherMap current-weather body, parsed permissively.

    ``cod`` arrives as an int on success and as a string ("404") on most errors.
    Sub-objects of the wrong shape are treated as absent.
    """

    model_config = ConfigDict(extra="ignore")

    cod: int | None = None
    message: str | None = None
    name: str = DEFAULT_CITY_NAME
    main: MainInfo = Field(default_factory=MainInfo)
    weather: list[WeatherInfo] = Field(default_factory=list)

    @field_validator("cod", mode="before")
    @classmethod
    def coerce_cod(cls, v: Any) -> int | None:
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("message", mode="before")
    @classmethod
    def keep_string_message(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return v if isinstance(v, str) else DEFAULT_CITY_NAME

    @field_validator("main", mode="before")
    @classmethod
    def default_main(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    @field_validator("weather", mode="before")
    @classmethod
    def default_weather(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]


class WeatherResult(BaseModel):
    """Current weather for one place, as returned by a successful lookup."""

    city_name: str
    temperature_celsius: float
    condition_description: str = Field(min_length=1)
    icon_code: str

    @property
    def temperature_display(self) -> str:
        """Whole degrees, truncated toward zero (21.9 -> "21°C", -3.7 -> "-3°C")."""
        return f"{math.trunc(self.temperature_celsius)}°C"

    @property
    def condition_display(self) -> str:
        """Description with every word capitalised ("light rain" -> "Light Rain")."""
        return " ".join(word.capitalize() for word in self.condition_description.split(" "))

    @property
    def icon_url(self) -> str:
        """OpenWeatherMap icon image URL for this result."""
        return ICON_URL_TEMPLATE.format(icon=self.icon_code)

    @classmethod
    def from_openweather(cls, data: OpenWeatherPayload) -> "WeatherResult":
        """Build a result from a parsed payload, applying the display defaults.

        Args:
            data: Permissively parsed OpenWeatherMap body

        Returns:
            WeatherResult with temperature 0.0 and description "N/A" when absent
        """
        first = data.weather[0] if data.weather else WeatherInfo()
        return cls(
            city_name=data.name,
            temperature_celsius=data.main.temp,
            condition_description=first.description,
            icon_code=first.icon,
        )


class ApiErrorKind(str, Enum):
    """Failure categories of a weather lookup."""

    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"
    API_REPORTED = "api_reported"


class ApiError(BaseModel):
    """A failed lookup described as a value."""

    kind: ApiErrorKind
    detail: str
    message: str | None = None
