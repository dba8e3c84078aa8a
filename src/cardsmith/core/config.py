"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Editor settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="CARDSMITH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Grid
    grid_size: int = Field(default=20, gt=0, description="Snap grid size in pixels")
    snap_to_grid: bool = Field(default=True, description="Snap move/resize by default")

    # Geometry
    default_width: int = Field(default=200, gt=0, description="Width of newly dropped components")
    default_height: int = Field(default=100, gt=0, description="Height of newly dropped components")
    min_width: int = Field(default=50, gt=0, description="Resize floor for width")
    min_height: int = Field(default=30, gt=0, description="Resize floor for height")
    clamp_to_canvas: bool = Field(default=True, description="Clamp edited coordinates to >= 0")

    # History
    history_limit: int = Field(default=0, ge=0, description="Max history entries (0 = unbounded)")

    # Export
    enable_export_cache: bool = Field(default=True, description="Cache generated artifacts")
    export_cache_size: int = Field(default=32, gt=0, description="Export cache max size")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
