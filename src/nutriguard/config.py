"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout_seconds: float = 30.0
    min_request_interval_seconds: float = 1.0
    max_retries: int = 3
    initial_retry_delay_seconds: float = 2.0
    allergen_penalty: int = 50
    vertical_threshold: float = 0.05
    horizontal_threshold: float = 0.1
    ocr_y_axis_up: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
