# tracker/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tracker.db")
    APP_NAME: str = "Tracker API"
    APP_DESC: str = "Issue tracker backend: tickets and comments"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # CORS origins, comma separated
    CORS_ORIGINS: str = "*"

    # Bearer tokens
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_SECONDS: int = 7 * 24 * 3600

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
