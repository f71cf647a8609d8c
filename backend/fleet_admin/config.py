"""Configuration management using Pydantic Settings."""

from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from FLEET_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FLEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./fleet.db"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["*"]

    # Auth
    token_ttl_hours: int = 12
    password_hash_iterations: int = 390000
    default_driver_password: str = "password123"

    # Shift rules
    max_shift_minutes: int = Field(default=480, gt=0)
    min_shift_minutes: int = Field(default=60, gt=0)

    # Startup seeding
    bootstrap_admin_email: str = "admin@fleet.local"
    bootstrap_admin_national_id: str = "123456"
    bootstrap_admin_password: Optional[str] = None
    seed_demo_driver: bool = False


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
