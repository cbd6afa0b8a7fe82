"""Application configuration loaded from environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    openai_api_key: Optional[str] = Field(
        default=None, description="Secret key for OpenAI APIs."
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model_normalize: str = "gpt-4o-mini"
    openai_model_one_shot: str = "gpt-5"
    max_output_tokens: int = 16_000

    batch_size: int = Field(default=40, ge=1)
    rules_confidence: float = Field(default=0.4, ge=0.0, le=1.0)
    snippet_max_chars: int = Field(default=200, ge=1, le=200)
    raw_payload_preview_chars: int = 2000

    output_json: str = "refs.hybrid.json"
    output_csv: Optional[str] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
