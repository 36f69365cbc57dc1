"""Protocol definitions for the collaborators around the weather lookup."""

from typing import Protocol

from simple_weather.models.presentation import PresentationKeys
from simple_weather.models.weather import Coordinates, WeatherResult


class LocationProvider(Protocol):
    """Source of one-shot location fixes (device sensor, browser, fixed config)."""

    async def request_permission(self) -> bool:
        """Ask for location access.

        Returns:
            True when access is granted
        """
        ...

    async def request_one_shot_location(self) -> Coordinates:
        """Return a single fix.

        Raises:
            LocationException: The fix could not be obtained
        """
        ...


class PresentationController(Protocol):
    """Screen that shows results and errors. Called only from the update context."""

    def show_result(self, result: WeatherResult, keys: PresentationKeys) -> None: ...

    def show_error(self, title: str, message: str) -> None: ...

    def show_icon(self, icon_code: str, image: bytes) -> None: ...
