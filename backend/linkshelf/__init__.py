"""linkshelf: a personal bookmark manager API."""

__version__ = "1.0.0"
