"""DC fast-charging contention simulator."""

__version__ = "0.1.0"
