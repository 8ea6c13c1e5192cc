"""Configuration package for the country atlas."""

from .settings import Environment, Settings, get_settings

__all__ = ["Environment", "Settings", "get_settings"]
