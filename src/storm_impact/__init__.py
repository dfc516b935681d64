"""Storm Impact: which NOAA storm event types hurt people and property most."""

__version__ = "0.1.0"
