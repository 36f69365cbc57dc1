"""Presentation categories derived from a condition description."""

from enum import Enum

from pydantic import BaseModel

from simple_weather.models.weather import WeatherResult


class BackgroundKey(str, Enum):
    """Background theme for the weather screen."""

    CLEAR_SKY = "clear_sky"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    THUNDERSTORM = "thunderstorm"
    DEFAULT = "default"


class IconKey(str, Enum):
    """Bundled icon shown next to the temperature."""

    SUNNY = "sunny"
    OVERCAST = "overcast"
    RAINY = "rainy"
    SNOWY = "snowy"
    THUNDERSTORM = "thunderstorm"
    CLOUDY = "cloudy"
    CUSTOM_DEFAULT = "custom_default"


class PresentationKeys(BaseModel):
    """Background and icon keys for one description."""

    background_key: BackgroundKey
    icon_key: IconKey


class WeatherView(BaseModel):
    """Everything a screen needs to show one result."""

    result: WeatherResult
    keys: PresentationKeys
    temperature_display: str
    condition_display: str
    icon_url: str

    @classmethod
    def build(cls, result: WeatherResult, keys: PresentationKeys, icon_url: str | None = None) -> "WeatherView":
        """Combine a result with its keys and display strings."""
        return cls(
            result=result,
            keys=keys,
            temperature_display=result.temperature_display,
            condition_display=result.condition_display,
            icon_url=icon_url or result.icon_url,
        )
