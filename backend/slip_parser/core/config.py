from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_BODY_BYTES = 20 * 1024 * 1024  # 20 MB


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_by_name=True,
        populate_by_name=True,
    )

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    ai_provider: str = "openai"
    slip_model: str = Field(
        default="gpt-4.1-mini",
        validation_alias=AliasChoices("SLIP_MODEL", "OPENAI_MODEL"),
    )
    ai_timeout_seconds: Optional[float] = None

    cost_per_1k_input_tokens: float = 0.00015
    cost_per_1k_output_tokens: float = 0.0006

    host: str = "0.0.0.0"
    port: int = 3000
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    log_level: str = "INFO"

    docs_enabled: bool = Field(default=True)
    openapi_enabled: bool = Field(default=True)

    @field_validator("ai_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value):
        if value is None:
            return "openai"
        return str(value).strip().lower() or "openai"

    @field_validator("ai_timeout_seconds", mode="before")
    @classmethod
    def _empty_timeout_is_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("cost_per_1k_input_tokens", "cost_per_1k_output_tokens", "max_body_bytes")
    @classmethod
    def _non_negative(cls, value):
        if value < 0:
            raise ValueError("must be non-negative")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
