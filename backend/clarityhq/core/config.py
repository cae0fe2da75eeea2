"""Application configuration managed via environment variables."""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "ClarityHQ API"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "postgresql+psycopg2://clarity@localhost:5432/clarityhq"
    cors_allow_origins: List[str] = ["http://localhost:5173"]
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "clarityhq"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    openai_timeout_seconds: float = 30.0
    # Seeds suggestion copy when a request does not pass its own seed (useful for demos).
    focus_plan_default_seed: int | None = None


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
