from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env", ".env-model"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )

    app_name: str = Field(default="Chat Gateway", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, ge=1, le=65535, alias="PORT")

    # e.g. "anthropic.claude-3-opus-20240229-v1:0"
    model_id: str = Field(min_length=1, alias="MODEL_ID")
    aws_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION"),
    )

    gateway_provider: Literal["bedrock", "gemini"] = Field(
        default="bedrock", alias="GATEWAY_PROVIDER"
    )
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )

    max_tokens: int = Field(default=1024, gt=0, alias="MAX_TOKENS")
    temperature: float = Field(default=0.3, ge=0.0, le=1.0, alias="TEMPERATURE")
    anthropic_version: str = Field(default="bedrock-2023-05-31", alias="ANTHROPIC_VERSION")
    request_timeout_seconds: float = Field(
        default=120.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS"
    )

    cors_enabled: bool = Field(default=False, alias="CORS_ENABLED")
    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    @model_validator(mode="after")
    def _check_provider_credentials(self) -> "Settings":
        if self.gateway_provider == "gemini" and not self.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required when GATEWAY_PROVIDER=gemini")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
