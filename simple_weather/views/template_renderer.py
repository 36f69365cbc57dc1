"""Template rendering for the weather screen."""

from pathlib import Path
from typing import Any

import httpx
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from simple_weather.config import Settings
from simple_weather.models.presentation import PresentationKeys
from simple_weather.models.weather import WeatherResult
from simple_weather.protocols import LocationProvider
from simple_weather.services.location_service import location_error_for
from simple_weather.services.presenter import WeatherPresenter

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


class TileController:
    """PresentationController that collects the outcome as template context."""

    def __init__(self):
        self.context: dict[str, Any] = {"error": None}

    def show_result(self, result: WeatherResult, keys: PresentationKeys) -> None:
        self.context = {
            "error": None,
            "city": result.city_name,
            "temperature": result.temperature_display,
            "condition": result.condition_display,
            "background_key": keys.background_key.value,
            "icon_key": keys.icon_key.value,
            "icon_code": result.icon_code,
        }

    def show_error(self, title: str, message: str) -> None:
        self.context = {"error": {"title": title, "message": message}, "background_key": "default"}

    def show_icon(self, icon_code: str, image: bytes) -> None:
        # The browser loads the image itself from /api/weather/icon/<code>
        pass


class TemplateRenderer:
    """Renders the search page and the weather tile fragments."""

    @staticmethod
    def render_index(request: Request, settings: Settings) -> HTMLResponse:
        """Render the search page."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"has_default_location": settings.has_default_location},
        )

    @staticmethod
    async def render_weather_tile(
        request: Request,
        client: httpx.AsyncClient,
        settings: Settings,
        provider: LocationProvider,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> HTMLResponse:
        """Render the weather tile for a city, a coordinate pair, or the provider's location.

        Args:
            request: FastAPI request object
            client: HTTP client for API calls
            settings: Settings instance
            provider: Location provider used when neither city nor coordinates are given
            city: City typed by the user (an empty string is shown as an error)
            lat: Latitude reported by the browser
            lon: Longitude reported by the browser

        Returns:
            HTMLResponse with the result or the error message
        """
        controller = TileController()
        presenter = WeatherPresenter(client, settings, controller, location_provider=provider, fetch_icons=False)

        if city is not None:
            await presenter.search(city)
        elif lat is not None and lon is not None:
            await presenter.use_coordinates(lat, lon)
        else:
            await presenter.use_current_location()

        return templates.TemplateResponse(request, "tiles/weather.html", controller.context)

    @staticmethod
    def render_location_error(request: Request, reason: str) -> HTMLResponse:
        """Render the fixed message for a failed browser location request."""
        error = location_error_for(reason)
        return templates.TemplateResponse(
            request,
            "tiles/weather.html",
            {"error": {"title": error.title, "message": error.message}, "background_key": "default"},
        )
