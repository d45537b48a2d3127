"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from src.shared.constants import (
    DEFAULT_FETCH_TIMEOUT_S,
    DEFAULT_METADATA_PATH,
    DEFAULT_TOP_N,
)


class SharedConfig(BaseSettings):
    """Base configuration shared across all entry points."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class CatalogConfig(SharedConfig):
    """Configuration for the Service Catalog API and graph tooling."""
    metadata_path: str = Field(
        default=DEFAULT_METADATA_PATH, validation_alias="SERVICE_METADATA_PATH"
    )
    metadata_url: str | None = Field(
        default=None, validation_alias="SERVICE_METADATA_URL"
    )
    fetch_timeout_s: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_S,
        gt=0,
        validation_alias="METADATA_FETCH_TIMEOUT",
    )
    top_n: int = Field(default=DEFAULT_TOP_N, ge=1, validation_alias="TOP_N_LIMIT")
