"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``SKICHASE_DEBUG=1`` or ``SKICHASE_DISPLAY__SCALE=2``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from skichase.constants import GAME_HEIGHT, GAME_WIDTH


class DisplaySettings(BaseModel):
    """Display-related settings."""

    # Viewport size in world pixels
    width: int = Field(default=GAME_WIDTH, gt=0)
    height: int = Field(default=GAME_HEIGHT, gt=0)

    # Rendering
    fps: int = Field(default=60, gt=0)
    scale: int = Field(default=1, ge=1)  # Window pixels per framebuffer pixel


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKICHASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Fixed seed for obstacle placement; random when unset
    seed: Optional[int] = None

    # Paths
    assets_path: Optional[Path] = None
    log_file: Optional[Path] = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
