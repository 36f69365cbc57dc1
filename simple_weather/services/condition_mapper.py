"""Map OpenWeatherMap condition descriptions to background and icon keys.

Both lookups compare the whole lowercased description against fixed tables;
anything not listed falls through to the default key. The two tables are
independent and do not agree on every description: "few clouds" is a clear
sky background with an overcast icon, and "overcast clouds" only has an icon.
"""

from simple_weather.models.presentation import BackgroundKey, IconKey, PresentationKeys

BACKGROUND_TABLE: dict[str, BackgroundKey] = {
    "clear sky": BackgroundKey.CLEAR_SKY,
    "few clouds": BackgroundKey.CLEAR_SKY,
    "scattered clouds": BackgroundKey.CLOUDY,
    "broken clouds": BackgroundKey.CLOUDY,
    "mist": BackgroundKey.CLOUDY,
    "rain": BackgroundKey.RAINY,
    "light rain": BackgroundKey.RAINY,
    "moderate rain": BackgroundKey.RAINY,
    "snow": BackgroundKey.SNOWY,
    "light snow": BackgroundKey.SNOWY,
    "moderate snow": BackgroundKey.SNOWY,
    "thunderstorm": BackgroundKey.THUNDERSTORM,
}

ICON_TABLE: dict[str, IconKey] = {
    "clear sky": IconKey.SUNNY,
    "few clouds": IconKey.OVERCAST,
    "scattered clouds": IconKey.OVERCAST,
    "broken clouds": IconKey.OVERCAST,
    "overcast clouds": IconKey.OVERCAST,
    "rain": IconKey.RAINY,
    "light rain": IconKey.RAINY,
    "moderate rain": IconKey.RAINY,
    "snow": IconKey.SNOWY,
    "light snow": IconKey.SNOWY,
    "moderate snow": IconKey.SNOWY,
    "thunderstorm": IconKey.THUNDERSTORM,
    "mist": IconKey.CLOUDY,
    "cloudy": IconKey.CLOUDY,
}


def background_for(description: str) -> BackgroundKey:
    """Return the background theme for a condition description (case-insensitive)."""
    return BACKGROUND_TABLE.get(description.lower(), BackgroundKey.DEFAULT)


def icon_for(description: str) -> IconKey:
    """Return the icon key for a condition description (case-insensitive)."""
    return ICON_TABLE.get(description.lower(), IconKey.CUSTOM_DEFAULT)


def presentation_keys_for(description: str) -> PresentationKeys:
    """Return both keys for a condition description."""
    return PresentationKeys(background_key=background_for(description), icon_key=icon_for(description))
