"""chalom: a markdown changelog with timestamped items and time reports."""

__version__ = "0.1.0"
