"""Drive one screen: run a lookup and report its outcome to a presentation controller.

Every controller call goes through ``dispatch`` so a front end with a UI thread
can marshal updates onto it. Each action ends in exactly one ``show_result`` or
``show_error``. The icon image is fetched afterwards in its own task and only
reaches the controller if it downloads.

Requests are neither de-duplicated nor cancelled: two searches started back to
back both run, and whichever finishes last is what the screen shows.
"""

import asyncio
from collections.abc import Awaitable, Callable

import httpx

from simple_weather.cache import IconCache
from simple_weather.config import Settings
from simple_weather.exceptions import SimpleWeatherException
from simple_weather.logging_config import get_logger, log_with_context
from simple_weather.models.weather import WeatherResult
from simple_weather.protocols import LocationProvider, PresentationController
from simple_weather.services import condition_mapper, location_service, weather_service

logger = get_logger(__name__)

Dispatch = Callable[[Callable[[], None]], object]


def _call_inline(update: Callable[[], None]) -> None:
    update()


class WeatherPresenter:
    """Wires user actions to the weather lookup and a PresentationController."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        controller: PresentationController,
        location_provider: LocationProvider | None = None,
        dispatch: Dispatch | None = None,
        icon_cache: IconCache | None = None,
        fetch_icons: bool = True,
    ):
        self.client = client
        self.settings = settings
        self.controller = controller
        self.location_provider = location_provider or location_service.StaticLocationProvider.from_settings(settings)
        self.dispatch = dispatch or _call_inline
        self.icon_cache = icon_cache
        self.fetch_icons = fetch_icons
        self._icon_tasks: set[asyncio.Task] = set()

    async def search(self, city: str) -> WeatherResult | None:
        """Look up ``city`` and show the outcome."""
        return await self._run(lambda: weather_service.fetch_by_city(self.client, city, self.settings))

    async def use_current_location(self) -> WeatherResult | None:
        """Look up the provider's current location and show the outcome."""
        return await self._run(
            lambda: location_service.fetch_for_current_location(self.client, self.location_provider, self.settings)
        )

    async def use_coordinates(self, lat: float, lon: float) -> WeatherResult | None:
        """Look up a coordinate pair reported by the front end (e.g. browser geolocation)."""
        return await self._run(lambda: weather_service.fetch_by_coordinates(self.client, lat, lon, self.settings))

    async def wait_for_icons(self) -> None:
        """Wait until every pending icon download has finished."""
        if self._icon_tasks:
            await asyncio.gather(*self._icon_tasks, return_exceptions=True)

    async def _run(self, lookup: Callable[[], Awaitable[WeatherResult]]) -> WeatherResult | None:
        try:
            result = await lookup()
        except SimpleWeatherException as e:
            log_with_context(
                logger,
                "info",
                "Showing error",
                error_code=e.code.value,
                error_message=e.message,
                event_type="presenter_error",
            )
            title, message = e.title, e.message
            self.dispatch(lambda: self.controller.show_error(title, message))
            return None

        keys = condition_mapper.presentation_keys_for(result.condition_description)
        self.dispatch(lambda: self.controller.show_result(result, keys))
        if self.fetch_icons:
            self._start_icon_download(result.icon_code)
        return result

    def _start_icon_download(self, icon_code: str) -> None:
        task = asyncio.create_task(self._load_icon(icon_code))
        self._icon_tasks.add(task)
        task.add_done_callback(self._icon_tasks.discard)

    async def _load_icon(self, icon_code: str) -> None:
        try:
            image = await weather_service.fetch_icon(self.client, icon_code, self.settings, self.icon_cache)
        except SimpleWeatherException as e:
            log_with_context(
                logger,
                "warning",
                "Icon download failed",
                icon_code=icon_code,
                error=e.message,
                event_type="icon_fetch_error",
            )
            return
        self.dispatch(lambda: self.controller.show_icon(icon_code, image))
