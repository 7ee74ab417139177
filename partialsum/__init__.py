"""partialsum - fast partial checksums for large file trees."""

from .version import __version__

__all__ = ["__version__"]
