"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PREDICTIONS_URL = (
    "https://api.replicate.com/v1/models/mistralai/"
    "mixtral-8x7b-instruct-v0.1/predictions"
)
DEFAULT_INDEX_FILE = Path(__file__).resolve().parent.parent / "static" / "index.html"


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    replicate_api_token: SecretStr
    replicate_predictions_url: str = DEFAULT_PREDICTIONS_URL
    request_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    log_file: str = "ai_sms_service.log"
    index_file: Path = DEFAULT_INDEX_FILE
    host: str = "0.0.0.0"
    port: int = 8080
    metrics_port: int = 8082

    @field_validator("replicate_api_token")
    @classmethod
    def _token_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            msg = "REPLICATE_API_TOKEN must not be empty."
            raise ValueError(msg)
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            msg = "REQUEST_TIMEOUT_SECONDS must be greater than zero."
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
