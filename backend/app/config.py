"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # UI
    ui_origin: str = "http://localhost:3000"

    # LLM itinerary generation
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    llm_timeout_s: float = 30.0

    # Fallback itinerary generation
    fallback_rng_seed: int = 42
    fallback_transport_cost_cents: int = 1500

    # Time optimization
    day_start_hour: int = 9
    activity_buffer_min: int = 30


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
