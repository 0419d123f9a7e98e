"""Shared helpers: logging setup and message formatting."""
