"""Configuration for BEAR RUN."""

from .settings import AudioSettings, DisplaySettings, GameSettings, Settings, get_settings

__all__ = ["AudioSettings", "DisplaySettings", "GameSettings", "Settings", "get_settings"]
