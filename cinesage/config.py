"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="CineSage", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3001, alias="PORT")

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    tmdb_timeout_seconds: float = Field(
        default=15.0, alias="TMDB_TIMEOUT", gt=0, le=120
    )

    openrouter_api_key: str | None = Field(
        default=None, alias="OPENROUTER_API_KEY"
    )
    openrouter_model: str = Field(
        default="deepseek/deepseek-r1-0528-qwen3-8b:free", alias="OPENROUTER_MODEL"
    )
    openrouter_api_url: HttpUrl = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_API_URL"
    )
    openrouter_temperature: float = Field(
        default=0.5, alias="OPENROUTER_TEMPERATURE", ge=0, le=2
    )
    openrouter_max_tokens: int = Field(
        default=1_500, alias="OPENROUTER_MAX_TOKENS", ge=100, le=16_000
    )
    openrouter_timeout_seconds: float = Field(
        default=60.0, alias="OPENROUTER_TIMEOUT", gt=0, le=300
    )
    openrouter_referer: str = Field(
        default="https://github.com/deborah-sylvia/cine-sage",
        alias="OPENROUTER_REFERER",
    )

    recommendation_candidate_limit: int = Field(
        default=20, alias="RECOMMENDATION_CANDIDATE_LIMIT", ge=1, le=200
    )
    recommendation_limit: int = Field(
        default=10, alias="RECOMMENDATION_LIMIT", ge=1, le=200
    )
    advisory_pick_count: int = Field(
        default=5, alias="ADVISORY_PICK_COUNT", ge=1, le=20
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("tmdb_api_key", "openrouter_api_key", mode="before")
    @classmethod
    def _blank_keys_are_missing(cls, value: object) -> object:
        """Treat empty API keys from the environment as unset."""

        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tmdb_language", mode="before")
    @classmethod
    def _normalise_language(cls, value: object) -> str:
        """Accept ``en_us`` style locales and emit TMDB's ``en-US`` form."""

        if value is None:
            return "en-US"
        raw = str(value).strip().replace("_", "-")
        if not raw:
            return "en-US"
        language, _, region = raw.partition("-")
        if not region:
            return language.lower()
        return f"{language.lower()}-{region.upper()}"

    @model_validator(mode="after")
    def _check_recommendation_limits(self) -> "Settings":
        """Ensure the final cap never exceeds the ranked candidate cap."""

        if self.recommendation_limit > self.recommendation_candidate_limit:
            raise ValueError(
                "RECOMMENDATION_LIMIT must not exceed RECOMMENDATION_CANDIDATE_LIMIT"
            )
        return self

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
