"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Daydicated"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./daydicated.db"
    DB_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Calendar
    CALENDAR_YEAR: int = 2026
    NOTIFICATION_LIFETIME_SECONDS: int = 5

    # Client settings (theme / accent color)
    SETTINGS_FEATURE_ENABLED: bool = True
    DEFAULT_THEME: str = "dark"  # "dark" or "light"
    DEFAULT_ACCENT_COLOR: str = "#0d6efd"

    # Export
    EXPORT_FILENAME_PREFIX: str = "daydicated"  # Files are named <prefix>-<year>.csv / .json

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
