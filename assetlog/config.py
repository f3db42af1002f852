"""
Configuration settings for assetlog.
Read from environment variables and an optional ``.env`` file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from assetlog.db.schema import INDEX_START

DEFAULT_DB_PATH = Path("data") / "inventory.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Store
    database_path: str = Field(default=str(DEFAULT_DB_PATH), validation_alias="INVENTORY_DB")
    index_start: int = Field(default=INDEX_START, ge=0, validation_alias="INVENTORY_INDEX_START")

    # Remarks timestamps; local time when unset
    utc_offset_minutes: Optional[int] = Field(
        default=None, ge=-24 * 60, le=24 * 60, validation_alias="INVENTORY_UTC_OFFSET_MINUTES"
    )

    # Logging
    log_level: str = Field(default="WARNING", validation_alias="INVENTORY_LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="INVENTORY_LOG_FILE")


def get_settings() -> Settings:
    return Settings()
