"""Application settings and configuration (Pydantic v2)."""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Database (SQLite by default, any SQLAlchemy URL works)
    database_url: str = Field(
        default="sqlite:///./students.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Log SQL statements")

    # HTTP
    cors_origins: List[str] = Field(default=["*"], description="CORS allow-list")
    log_level: str = Field(default="INFO")

    # Client
    api_base_url: str = Field(
        default="http://localhost:8000", description="Base URL of the students API"
    )
    api_token: Optional[str] = Field(default=None, description="Bearer token")
    request_timeout: float = Field(default=10.0, description="Seconds per request")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )


# Global settings instance
settings = Settings()
