"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from simple_weather import __version__
from simple_weather.config import Settings, get_settings
from simple_weather.core.lifespan import lifespan
from simple_weather.core.middleware import setup_middleware
from simple_weather.middleware.error_handlers import register_error_handlers
from simple_weather.routers import health_router, view_router, weather_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings used for middleware setup (defaults to the shared instance)

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="SimpleWeather API",
        description="""
        Current weather for a city or a coordinate pair, from OpenWeatherMap.

        Each result carries a **background key** and an **icon key** derived
        from the condition description, so clients can theme the screen
        without their own lookup tables.

        - `/api/weather/city?q=Paris`
        - `/api/weather/coordinates?lat=48.85&lon=2.35`
        - `/api/weather/current-location` (configured default location)
        - `/api/weather/conditions?description=light%20rain`
        - `/api/weather/icon/10d`

        Errors are returned as `{"error": {"code", "title", "message", "details"}}`.
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={"name": "MIT"},
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.include_router(view_router.router, tags=["views"])
    app.include_router(health_router.router, tags=["health"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])

    return app
