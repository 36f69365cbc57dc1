"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from simple_weather.config import Settings, get_settings
from simple_weather.core.app_factory import create_app
from simple_weather.core.middleware import limiter
from simple_weather.dependencies import get_http_client

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


def make_response(
    json_data: Any = None,
    status_code: int = 200,
    content: bytes | None = None,
    url: str = WEATHER_URL,
) -> httpx.Response:
    """Build a real httpx.Response bound to a request, as the client would return it."""
    request = httpx.Request("GET", url)
    if content is not None:
        return httpx.Response(status_code, content=content, request=request)
    return httpx.Response(status_code, json=json_data, request=request)


@pytest.fixture
def response_factory() -> Callable[..., httpx.Response]:
    return make_response


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings with test values, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        api_host="127.0.0.1",
        api_port=8000,
        weather_api_key="test-weather-key",
        default_latitude=48.8566,
        default_longitude=2.3522,
    )


@pytest.fixture
def settings_without_key():
    """Settings with no API key configured."""
    return Settings(_env_file=None, weather_api_key="")


@pytest.fixture
def mock_weather_response():
    """OpenWeatherMap current-weather body for Paris."""
    return {
        "coord": {"lon": 2.3488, "lat": 48.8534},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "base": "stations",
        "main": {"temp": 21.9, "feels_like": 21.5, "pressure": 1012, "humidity": 70},
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 230},
        "clouds": {"all": 75},
        "dt": 1760000000,
        "sys": {"country": "FR", "sunrise": 1759990000, "sunset": 1760030000},
        "timezone": 7200,
        "id": 2988507,
        "name": "Paris",
        "cod": 200,
    }


@pytest.fixture
def mock_not_found_response():
    """OpenWeatherMap body for an unknown city (cod arrives as a string)."""
    return {"cod": "404", "message": "city not found"}


@pytest.fixture
def app(mock_settings, mock_http_client):
    """FastAPI app wired to the mock HTTP client and test settings."""
    application = create_app(mock_settings)
    application.dependency_overrides[get_settings] = lambda: mock_settings
    application.dependency_overrides[get_http_client] = lambda: mock_http_client
    limiter.reset()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
