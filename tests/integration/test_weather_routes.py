"""Integration tests for the weather API routes."""

import httpx
from fastapi.testclient import TestClient

from simple_weather.config import Settings, get_settings
from simple_weather.core import middleware
from simple_weather.core.app_factory import create_app
from simple_weather.core.middleware import limiter
from simple_weather.dependencies import get_http_client, get_location_provider
from simple_weather.services.location_service import StaticLocationProvider


def test_weather_by_city(test_client, mock_http_client, mock_weather_response, response_factory):
    """Test city lookup returns the result, display strings and keys."""
    mock_http_client.get.return_value = response_factory(mock_weather_response)

    response = test_client.get("/api/weather/city", params={"q": "Paris"})

    assert response.status_code == 200
    data = response.json()
    assert data["result"] == {
        "city_name": "Paris",
        "temperature_celsius": 21.9,
        "condition_description": "light rain",
        "icon_code": "10d",
    }
    assert data["temperature_display"] == "21°C"
    assert data["condition_display"] == "Light Rain"
    assert data["keys"] == {"background_key": "rainy", "icon_key": "rainy"}
    assert data["icon_url"] == "https://openweathermap.org/img/wn/10d@2x.png"


def test_weather_by_city_not_found(test_client, mock_http_client, mock_not_found_response, response_factory):
    """Test that the API's own message is returned in the error envelope."""
    mock_http_client.get.return_value = response_factory(mock_not_found_response, status_code=404)

    response = test_client.get("/api/weather/city", params={"q": "Atlantis"})

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "API_REPORTED_ERROR"
    assert error["title"] == "Error"
    assert error["message"] == "city not found"


def test_weather_by_city_blank(test_client, mock_http_client):
    response = test_client.get("/api/weather/city", params={"q": "  "})

    assert response.status_code == 422
    assert response.json()["error"]["message"] == "Please enter a city name."
    mock_http_client.get.assert_not_called()


def test_weather_by_city_missing_key(app, test_client, mock_http_client, settings_without_key):
    app.dependency_overrides[get_settings] = lambda: settings_without_key

    response = test_client.get("/api/weather/city", params={"q": "Paris"})

    assert response.status_code == 500
    assert response.json()["error"] == {
        "code": "MISSING_API_KEY",
        "title": "Error",
        "message": "API Key is missing",
        "details": {"detail": "API Key is missing", "api_code": None},
    }
    mock_http_client.get.assert_not_called()


def test_weather_network_failure(test_client, mock_http_client):
    mock_http_client.get.side_effect = httpx.ConnectError("Connection failed")

    response = test_client.get("/api/weather/city", params={"q": "Paris"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "NETWORK_FAILURE"


def test_weather_malformed_response(test_client, mock_http_client, response_factory):
    mock_http_client.get.return_value = response_factory(content=b"not json")

    response = test_client.get("/api/weather/city", params={"q": "Paris"})

    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Unexpected response format."


def test_weather_by_coordinates(test_client, mock_http_client, mock_weather_response, response_factory):
    mock_http_client.get.return_value = response_factory(mock_weather_response)

    response = test_client.get("/api/weather/coordinates", params={"lat": 48.85, "lon": 2.35})

    assert response.status_code == 200
    params = mock_http_client.get.call_args.kwargs["params"]
    assert float(params["lat"]) == 48.85
    assert "q" not in params


def test_weather_by_coordinates_out_of_range(test_client, mock_http_client):
    response = test_client.get("/api/weather/coordinates", params={"lat": 120, "lon": 0})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_QUERY"
    mock_http_client.get.assert_not_called()


def test_weather_for_current_location(test_client, mock_http_client, mock_weather_response, response_factory):
    mock_http_client.get.return_value = response_factory(mock_weather_response)

    response = test_client.get("/api/weather/current-location")

    assert response.status_code == 200
    params = mock_http_client.get.call_args.kwargs["params"]
    assert float(params["lat"]) == 48.8566


def test_weather_for_current_location_unconfigured(app, test_client, mock_http_client):
    app.dependency_overrides[get_location_provider] = lambda: StaticLocationProvider()

    response = test_client.get("/api/weather/current-location")

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "LOCATION_UNAVAILABLE"
    mock_http_client.get.assert_not_called()


def test_condition_keys(test_client, mock_http_client):
    response = test_client.get("/api/weather/conditions", params={"description": "Few Clouds"})

    assert response.status_code == 200
    assert response.json() == {"background_key": "clear_sky", "icon_key": "overcast"}
    mock_http_client.get.assert_not_called()


def test_condition_keys_unknown(test_client):
    response = test_client.get("/api/weather/conditions", params={"description": "volcanic ash"})

    assert response.json() == {"background_key": "default", "icon_key": "custom_default"}


def test_weather_icon(test_client, mock_http_client, response_factory):
    mock_http_client.get.return_value = response_factory(content=b"\x89PNG")

    first = test_client.get("/api/weather/icon/10d")
    second = test_client.get("/api/weather/icon/10d")

    assert first.status_code == 200
    assert first.headers["content-type"] == "image/png"
    assert first.content == b"\x89PNG"
    assert second.content == b"\x89PNG"
    assert mock_http_client.get.await_count == 1


def test_weather_icon_rejects_bad_code(test_client, mock_http_client):
    response = test_client.get("/api/weather/icon/evil")

    assert response.status_code == 422
    mock_http_client.get.assert_not_called()


def test_unexpected_error_is_generic(test_client, mock_http_client):
    mock_http_client.get.side_effect = RuntimeError("boom")

    response = test_client.get("/api/weather/city", params={"q": "Paris"})

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "INTERNAL_ERROR", "title": "Error", "message": "Internal server error", "details": {}}
    }


def test_rate_limit_comes_from_app_settings(monkeypatch, mock_http_client):
    """Test that the rate limit given to create_app applies, not the process-wide settings."""
    monkeypatch.setattr(middleware, "_rate_limit", None)
    settings = Settings(_env_file=None, weather_api_key="test-weather-key", rate_limit="1/minute")
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: mock_http_client
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as client:
        first = client.get("/api/weather/city", params={"q": ""})
        second = client.get("/api/weather/city", params={"q": ""})

    limiter.reset()
    assert app.state.rate_limit == "1/minute"
    assert first.status_code == 422
    assert second.status_code == 429
