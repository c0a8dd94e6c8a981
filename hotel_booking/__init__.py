"""Hotel booking service: room availability and double-booking prevention."""

__version__ = "1.0.0"
