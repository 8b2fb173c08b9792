"""Weather Screen App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("weather-screen")
except PackageNotFoundError:
    __version__ = "dev"
