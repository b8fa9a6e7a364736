"""Weather and news dashboard API for a single city."""

__version__ = "0.1.0"
