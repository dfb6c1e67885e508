"""Mapeo Config Deconstructor - split packaged Mapeo configurations into editable files."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mapeo-config-deconstructor")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
