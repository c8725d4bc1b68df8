"""Application configuration loaded from environment variables and .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Inventory
    INVENTORY_MAX_WEIGHT: int = Field(default=1000, ge=0)
    MAX_EQUIPPED_ITEMS: int = Field(default=4, ge=1)

    # 표시 규칙
    HIGH_TIER_REQUIRED_LEVEL: int = Field(default=60, ge=1)
    RARITY_GLYPH: str = Field(default="★", min_length=1)


settings = Settings()
