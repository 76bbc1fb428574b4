"""Configuration management for zplgfa."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zplgfa.models.graphic import GraphicType

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Application configuration loaded from config.yaml."""

    default_graphic_type: GraphicType = GraphicType.COMPRESSED_ASCII
    # Largest accepted image in pixels (width * height), 0 disables the check
    max_image_pixels: int = 4_000_000
    # API key for external access (optional, if not set API is open)
    api_key: str | None = None

    @field_validator("default_graphic_type", mode="before")
    @classmethod
    def _parse_graphic_type(cls, value):
        if isinstance(value, str):
            return GraphicType.parse(value)
        return value

    @field_validator("max_image_pixels")
    @classmethod
    def _check_max_image_pixels(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_image_pixels must not be negative")
        return value


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZPLGFA_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config.yaml")
    host: str = "0.0.0.0"
    port: int = 7980
    debug: bool = False


def load_config(config_path: Path) -> AppConfig:
    """Load application configuration from YAML file."""
    if not config_path.exists():
        logger.info(f"Config file {config_path} not found, using defaults")
        return AppConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig.model_validate(data)


# Global settings instance
settings = Settings()
