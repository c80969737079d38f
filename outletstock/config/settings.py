"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "outletstock.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class SyncSettings(BaseSettings):
    """Reconciliation rules applied to externally sourced items."""

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    default_unit: str = "kg"
    fallback_location: str = "central-kitchen"
    locations: list[str] = [
        "central-kitchen",
        "kuwait-city",
        "vibe-complex",
        "mall-360",
        "taiba-kitchen",
    ]
    # External location name -> canonical location key
    location_aliases: dict[str, str] = {
        "TLB central kitchen": "central-kitchen",
        "central kitchen": "central-kitchen",
        "TLB City": "kuwait-city",
        "kuwait city": "kuwait-city",
        "TLB vibes": "vibe-complex",
        "vibes complex": "vibe-complex",
        "TLB 360 RNA": "mall-360",
        "360 Mall": "mall-360",
        "clinic": "taiba-kitchen",
        "Taiba Hospital": "taiba-kitchen",
        "TLB Taiba": "taiba-kitchen",
    }

    # Defaults for newly created materials
    minimum_stock: float = 10.0
    maximum_stock: float = 1000.0
    reorder_point: float = 20.0
    default_category: str = "General"
    parent_category: str = "Raw Materials"

    @model_validator(mode="after")
    def check_fallback_location(self) -> "SyncSettings":
        if self.fallback_location not in self.locations:
            raise ValueError(
                f"fallback_location '{self.fallback_location}' is not a known location"
            )
        return self


class ZohoSettings(BaseSettings):
    """Zoho Inventory API configuration."""

    model_config = SettingsConfigDict(env_prefix="ZOHO_")

    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    organization_id: str = ""
    accounts_url: str = "https://accounts.zoho.com"
    api_base_url: str = "https://www.zohoapis.com/inventory/v1"

    timeout: float = 30.0  # seconds
    page_size: int = 200
    detail_batch_size: int = 100

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Outlet Stock Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["auto", "json", "console"] = "auto"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    zoho: ZohoSettings = Field(default_factory=ZohoSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
