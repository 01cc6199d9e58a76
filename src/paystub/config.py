import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Paystub API"
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")
    cors_origins: list[AnyHttpUrl] = []

    tax_table_version: str = "2023_v1"

    content_load_timeout: float = Field(default=30.0, gt=0, description="Seconds allowed to lay out the document")
    render_timeout: float = Field(default=30.0, gt=0, description="Seconds allowed to produce the PDF bytes")
    render_start_method: Literal["spawn", "fork", "forkserver"] = "spawn"
    page_format: Literal["Letter", "A4"] = "Letter"
    margin: float = Field(default=50.0, ge=0, description="Uniform page margin in points")

    price_cents: int = Field(default=499, gt=0)
    api_tokens: Dict[str, str] = Field(default_factory=dict, description="Bearer token to user id")

    model_config = SettingsConfigDict(env_prefix="PAYSTUB_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[AnyHttpUrl]) -> list[AnyHttpUrl]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin]
        return value


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("PAYSTUB_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())
