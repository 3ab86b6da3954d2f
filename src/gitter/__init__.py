"""Discover, create and run git commands against repositories on disk."""

from importlib import metadata

try:  # pragma: no cover
    __version__ = metadata.version("gitter")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
