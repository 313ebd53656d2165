"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups are overridden with a double underscore, e.g.
``BEARRUN_GAME__SPAWN_RATE=0.03``.
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseModel):
    """Simulation dynamics. All values are per tick."""

    # Runner physics
    gravity: float = Field(default=0.6, gt=0.0)
    jump_velocity: float = Field(default=-12.0, lt=0.0)
    animation_rate: float = Field(default=0.15, ge=0.0)

    # Difficulty staircase
    base_speed: float = Field(default=5.0, gt=0.0)
    speed_step: float = Field(default=0.5, ge=0.0)
    speed_milestone: int = Field(default=5, ge=1)

    # Spawn gap policy
    base_gap: float = 280.0
    gap_shrink_factor: float = Field(default=8.0, ge=0.0)
    min_gap: float = Field(default=180.0, ge=0.0)

    # Spawn cadence and variants
    spawn_rate: float = Field(default=0.02, ge=0.0)
    tall_min_score: int = Field(default=5, ge=0)
    tall_probability: float = Field(default=0.4, ge=0.0, le=1.0)

    # Day/night
    night_threshold: int = Field(default=17, ge=1)
    night_step: float = Field(default=0.005, gt=0.0, le=1.0)


class DisplaySettings(BaseModel):
    """Display-related settings."""

    # Logical field (the simulation coordinate space)
    field_width: int = 800
    field_height: int = 300

    # Window
    window_width: int = 824
    window_height: int = 420
    fullscreen: bool = False

    # Rendering
    fps: int = Field(default=60, ge=1)
    star_count: int = Field(default=50, ge=0)


class AudioSettings(BaseModel):
    """Sound cue settings."""

    enabled: bool = True
    sample_rate: int = 44100
    volume: float = Field(default=0.8, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BEARRUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    title: str = "BEAR RUN"
    seed: int | None = None

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
