"""Configuration for Ski Chase."""

from skichase.config.settings import DisplaySettings, Settings, get_settings

__all__ = ["DisplaySettings", "Settings", "get_settings"]
