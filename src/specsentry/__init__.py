"""specsentry: find public Ruby methods that have no matching spec."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("specsentry")
except PackageNotFoundError:
    __version__ = "dev"
