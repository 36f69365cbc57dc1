"""Integration tests for health endpoints."""

from simple_weather.config import get_settings


def test_health(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


def test_readiness_ready(test_client):
    response = test_client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["http_client"] == "ok"
    assert data["checks"]["weather_api_key"] == "ok"
    assert data["checks"]["default_location"] == "configured"


def test_readiness_without_api_key(app, test_client, settings_without_key):
    app.dependency_overrides[get_settings] = lambda: settings_without_key

    response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"]["weather_api_key"] == "missing"
