"""shortdebug - Debug formatting code generator that skips empty fields."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("shortdebug")
except PackageNotFoundError:
    __version__ = "(local)"
