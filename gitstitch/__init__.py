"""Stitch independent git histories into one tree and rip them apart again."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("git-stitch")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
