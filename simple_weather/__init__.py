"""SimpleWeather API App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("simple-weather")
except PackageNotFoundError:
    __version__ = "dev"
