"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Catalog provider (TMDB) - token name shared with the mobile client's env file
    tmdb_api_token: str = Field(default="", validation_alias="API_TMDB_TOKEN")
    tmdb_api_url: str = Field(
        default="https://api.themoviedb.org/3",
        validation_alias="TMDB_API_URL",
    )
    tmdb_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500",
        validation_alias="TMDB_IMAGE_BASE_URL",
    )
    tmdb_language: str = Field(default="en-US", validation_alias="TMDB_LANGUAGE")
    tmdb_timeout: float = Field(default=10.0, gt=0, validation_alias="TMDB_TIMEOUT")

    # Credentials
    password_hash_iterations: int = Field(
        default=600_000,
        ge=1000,
        validation_alias="PASSWORD_HASH_ITERATIONS",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite (no connection pool sizing)."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
