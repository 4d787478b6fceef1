"""Shows API: REST resource for shows with image uploads."""

__version__ = "1.0.0"
