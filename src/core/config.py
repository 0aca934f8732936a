"""Configuration management for pawledger."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./data/pawledger.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Deployment
    environment: str = Field(default="development", description="Deployment environment name")


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_NOT_FOUND: int = 404
    HTTP_UNPROCESSABLE: int = 422
    HTTP_SERVER_ERROR: int = 500
    HTTP_SERVICE_UNAVAILABLE: int = 503

    # Care status derivation
    RECENT_INJURY_WINDOW_DAYS: int = 30  # Injuries dated within this many trailing days are "recent"
    DASHBOARD_PREVIEW_LIMIT: int = 3  # Items shown per dashboard section before "+N more"

    # Data access
    FETCH_ALL_PAGE_SIZE: int = 500  # Rows read per page when loading a full collection


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
