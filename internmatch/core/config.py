"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "internmatch_user"
    postgres_password: str = "password"
    postgres_db: str = "internmatch_db"

    # MongoDB (translation cache)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "internmatch_docs"

    # Completion service (any OpenAI-compatible endpoint, Gemini by default)
    ai_api_key: str = ""
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-2.0-flash"
    ai_timeout_seconds: float = 20.0
    ai_top_n: int = 5
    ai_matching_enabled: bool = True

    # Caching
    translation_cache_enabled: bool = True
    catalog_cache_ttl_seconds: int = 300

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
