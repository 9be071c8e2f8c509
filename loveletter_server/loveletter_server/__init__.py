"""Love Letter rules server."""

__version__ = "0.1.0"
