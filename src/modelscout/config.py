"""Unified configuration via Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict



class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MODELSCOUT_", env_file=".env", extra="ignore", frozen=True)

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Catalog service
    catalog_url: str = "http://localhost:8080"
    catalog_providers_path: str = "/v2/providers"
    catalog_timeout: int = 30
    catalog_path: str | None = None  # local YAML/JSON catalog instead of the service
    catalog_max_age: int = 300  # seconds before the service revalidates its snapshot

    # Chat completions
    completion_timeout: int = 120

    # Matching
    search_limit: int = 10
    wizard_preview_limit: int = 5
    wizard_detail_limit: int = 3
    search_scoring_policy: str = "simple"  # simple | requirements
    wizard_scoring_policy: str = "requirements"

    # Output
    default_output_format: str = "table"  # table | json | csv


@lru_cache
def get_settings() -> Settings:
    return Settings()
