"""Room Vote — real-time group voting on named suggestions."""

__version__ = "0.1.0"
