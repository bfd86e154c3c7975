"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_token: str
    supabase_url: str
    supabase_service_key: str
    nutrition_api_key: str | None = None
    nutrition_api_base_url: str = "https://api.nutritionapi.com"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    max_image_bytes: int = 5_000_000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
