"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,  # Allow Settings(storage_backend=...) in tests
    )

    # Application
    app_name: str = Field(default="Taskboard API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")

    # API Service
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=4000, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origin: str = Field(default="", alias="CORS_ORIGIN")

    # Storage backend selection
    storage_backend: Literal["sql", "mongo"] = Field(
        default="sql", alias="STORAGE_BACKEND"
    )

    # Relational store (SQLAlchemy async URL)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./tasks.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # MongoDB Settings
    mongodb_url: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URL")
    mongodb_database: str = Field(default="taskboard", alias="MONGODB_DATABASE")
    mongodb_max_pool_size: int = Field(default=10, alias="MONGODB_MAX_POOL_SIZE")
    mongodb_min_pool_size: int = Field(default=1, alias="MONGODB_MIN_POOL_SIZE")
    tasks_collection: str = Field(default="tasks", alias="TASKS_COLLECTION")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    log_to_file: bool = Field(default=True, alias="LOG_TO_FILE")

    @property
    def cors_origins(self) -> List[str]:
        """
        Parse CORS_ORIGIN into a list of origins.
        An empty value allows every origin.
        """
        origins = [o.strip() for o in self.cors_origin.split(",") if o.strip()]
        return origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
