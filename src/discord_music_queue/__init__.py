"""Per-guild music queue bot for Discord."""

__version__ = "0.1.0"
