from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # repository root

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENWEATHER_ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a default so the app always starts. A missing weather API
    key is reported per request ("API Key is missing") rather than at start-up.
    Values come from environment variables or the ``.env`` file.
    """

    # Server
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    log_level: str = Field(default="INFO", description="Console log level")

    # OpenWeatherMap
    weather_api_key: str = Field(default="", description="OpenWeatherMap API key")
    weather_api_url: str = Field(default=OPENWEATHER_URL, pattern=r"^https?://", description="Current weather URL")
    weather_icon_url_template: str = Field(
        default=OPENWEATHER_ICON_URL,
        pattern=r"^https?://",
        description="Icon image URL with an {icon} placeholder",
    )
    weather_units: str = Field(default="metric", description="Units requested from the API")
    icon_cache_ttl_seconds: int = Field(default=86400, ge=0, description="How long icon images stay cached")

    # Fixed location used for "current location" when the caller has no sensor
    default_latitude: float | None = Field(default=None, ge=-90, le=90)
    default_longitude: float | None = Field(default=None, ge=-180, le=180)

    # HTTP surface
    cors_origins: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        description="Comma separated list of allowed CORS origins",
    )
    rate_limit: str = Field(default="60/minute", description="Per-client rate limit for weather routes")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("weather_api_key", mode="after")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("weather_icon_url_template", mode="after")
    @classmethod
    def validate_icon_template(cls, v: str) -> str:
        """Ensure the icon template has a place for the icon code."""
        if "{icon}" not in v:
            raise ValueError("weather_icon_url_template must contain an {icon} placeholder")
        return v

    @model_validator(mode="after")
    def validate_default_location(self) -> "Settings":
        """Latitude and longitude are configured together or not at all."""
        if (self.default_latitude is None) != (self.default_longitude is None):
            raise ValueError("default_latitude and default_longitude must be set together")
        return self

    @property
    def has_default_location(self) -> bool:
        return self.default_latitude is not None and self.default_longitude is not None

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list, blanks removed."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def icon_url(self, icon_code: str) -> str:
        """Image URL for an OpenWeatherMap icon code."""
        return self.weather_icon_url_template.format(icon=icon_code)


# Process-wide instance for FastAPI's Depends(); services always take settings explicitly
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the shared Settings instance for dependency injection.

    Created on first use so the ``.env`` file is read once. Tests override this
    dependency instead of mutating the instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
