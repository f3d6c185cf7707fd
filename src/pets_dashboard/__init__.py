"""Petfinder adoption dashboard: API client, view models and web UI."""

__version__ = "0.1.0"
