"""Tests for weather models and their properties."""

import pytest
from pydantic import TypeAdapter, ValidationError

from simple_weather.models.presentation import BackgroundKey, IconKey, PresentationKeys, WeatherView
from simple_weather.models.weather import (
    CityQuery,
    CoordinatesQuery,
    OpenWeatherPayload,
    WeatherQuery,
    WeatherResult,
)


class TestWeatherQuery:
    """Tests for the city/coordinates query variants."""

    def test_city_name_is_stripped(self):
        assert CityQuery(name="  Paris  ").name == "Paris"

    def test_blank_city_rejected(self):
        with pytest.raises(ValidationError):
            CityQuery(name="   ")

    @pytest.mark.parametrize(("lat", "lon"), [(90, 180), (-90, -180), (0, 0)])
    def test_coordinates_bounds_inclusive(self, lat, lon):
        query = CoordinatesQuery(lat=lat, lon=lon)
        assert (query.lat, query.lon) == (lat, lon)

    @pytest.mark.parametrize(("lat", "lon"), [(90.1, 0), (0, 180.1), (float("nan"), 0), (0, float("-inf"))])
    def test_coordinates_rejected(self, lat, lon):
        with pytest.raises(ValidationError):
            CoordinatesQuery(lat=lat, lon=lon)

    def test_discriminated_union(self):
        """Test that the kind field picks exactly one variant."""
        adapter = TypeAdapter(WeatherQuery)

        assert isinstance(adapter.validate_python({"kind": "city", "name": "Oslo"}), CityQuery)
        assert isinstance(adapter.validate_python({"kind": "coordinates", "lat": 1, "lon": 2}), CoordinatesQuery)
        with pytest.raises(ValidationError):
            adapter.validate_python({"kind": "postcode", "name": "1000"})


class TestWeatherResult:
    """Tests for WeatherResult display properties."""

    @pytest.mark.parametrize(
        ("temp", "expected"),
        [(21.9, "21°C"), (21.1, "21°C"), (0.0, "0°C"), (-0.5, "0°C"), (-3.7, "-3°C"), (30, "30°C")],
    )
    def test_temperature_display_truncates(self, temp, expected):
        result = WeatherResult(city_name="X", temperature_celsius=temp, condition_description="mist", icon_code="50d")
        assert result.temperature_display == expected

    def test_condition_display(self):
        result = WeatherResult(
            city_name="Paris", temperature_celsius=12, condition_description="light rain", icon_code="10d"
        )
        assert result.condition_display == "Light Rain"

    @pytest.mark.parametrize(
        ("description", "expected"),
        [("it's raining", "It's Raining"), ("HEAVY  rain", "Heavy  Rain"), ("light RAIN", "Light Rain")],
    )
    def test_condition_display_capitalizes_words(self, description, expected):
        """Test that only the first letter of each space-separated word is raised."""
        result = WeatherResult(city_name="X", temperature_celsius=1, condition_description=description, icon_code="01d")
        assert result.condition_display == expected

    def test_icon_url(self):
        result = WeatherResult(city_name="Paris", temperature_celsius=12, condition_description="mist", icon_code="50n")
        assert result.icon_url == "https://openweathermap.org/img/wn/50n@2x.png"

    def test_empty_description_rejected(self):
        with pytest.raises(ValidationError):
            WeatherResult(city_name="Paris", temperature_celsius=12, condition_description="", icon_code="01d")

    def test_from_openweather(self, mock_weather_response):
        result = WeatherResult.from_openweather(OpenWeatherPayload.model_validate(mock_weather_response))

        assert result.city_name == "Paris"
        assert result.temperature_celsius == 21.9
        assert result.condition_description == "light rain"
        assert result.icon_code == "10d"

    def test_from_openweather_empty_weather_list(self):
        payload = OpenWeatherPayload.model_validate({"cod": 200, "name": "Lima", "main": {"temp": 18}, "weather": []})
        result = WeatherResult.from_openweather(payload)

        assert result.condition_description == "N/A"
        assert result.icon_code == "01d"


class TestOpenWeatherPayload:
    """Tests for the permissive raw payload model."""

    @pytest.mark.parametrize(("cod", "expected"), [(200, 200), ("404", 404), ("abc", None), (None, None)])
    def test_cod_coercion(self, cod, expected):
        assert OpenWeatherPayload.model_validate({"cod": cod}).cod == expected

    def test_non_string_message_ignored(self):
        assert OpenWeatherPayload.model_validate({"cod": 500, "message": 42}).message is None

    def test_non_numeric_temperature_defaults(self):
        payload = OpenWeatherPayload.model_validate({"main": {"temp": "warm"}})
        assert payload.main.temp == 0.0

    def test_blank_description_defaults(self):
        payload = OpenWeatherPayload.model_validate({"weather": [{"description": "", "icon": None}]})
        assert payload.weather[0].description == "N/A"
        assert payload.weather[0].icon == "01d"


def test_weather_view_build():
    """Test combining a result with its keys."""
    result = WeatherResult(city_name="Paris", temperature_celsius=21.9, condition_description="light rain", icon_code="10d")
    keys = PresentationKeys(background_key=BackgroundKey.RAINY, icon_key=IconKey.RAINY)

    view = WeatherView.build(result, keys)

    assert view.temperature_display == "21°C"
    assert view.condition_display == "Light Rain"
    assert view.icon_url == "https://openweathermap.org/img/wn/10d@2x.png"
    assert view.model_dump(mode="json")["keys"] == {"background_key": "rainy", "icon_key": "rainy"}
