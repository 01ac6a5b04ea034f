"""Shared configuration loaded from environment / ``.env``."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup."""


# Settings that must be non-empty before an ingestion run may start.
REQUIRED_SETTINGS: tuple[str, ...] = (
    "huggingface_api_key",
    "chroma_host",
    "chroma_database",
    "chroma_token",
    "chroma_collection",
)


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Hosted embedding APIs
    huggingface_api_key: str = Field(default="", description="Bearer token for the Hugging Face inference API")
    primary_embedding_url: str = (
        "https://router.huggingface.co/hf-inference/models/"
        "sentence-transformers/all-mpnet-base-v2/pipeline/feature-extraction"
    )
    secondary_embedding_url: str = (
        "https://router.huggingface.co/hf-inference/models/"
        "intfloat/e5-large-v2/pipeline/feature-extraction"
    )
    embedding_timeout: float = Field(default=60.0, description="Per-request timeout in seconds")
    embedding_max_retries: int = Field(default=3, ge=1, description="Attempts for the primary model")
    embedding_retry_delay: float = Field(default=2.0, ge=0, description="Fixed delay between primary attempts")
    embedding_input_limit: int = Field(default=512, gt=0, description="Characters sent per embedding request")

    # Vector store
    chroma_host: str = Field(default="", description="Chroma server hostname (store endpoint)")
    chroma_port: int = 8000
    chroma_ssl: bool = False
    chroma_tenant: str = "default_tenant"
    chroma_database: str = Field(default="", description="Chroma database (namespace)")
    chroma_token: str = Field(default="", description="Chroma bearer token")
    chroma_collection: str = ""
    vector_dimension: int = 1536
    similarity_metric: Literal["cosine", "l2", "ip"] = "cosine"
    recreate_collection: bool = Field(
        default=True,
        description="Drop and recreate the collection before ingesting (full re-ingestion)",
    )

    # Chunking
    chunk_size: int = 512
    chunk_overlap: int = 100
    min_chunk_length: int = Field(default=10, description="Chunks shorter than this (trimmed) are skipped")

    # Pipeline pacing
    pacing_interval: float = Field(default=0.2, ge=0, description="Seconds to sleep after each successful insert")

    # Headless browser
    browser_headless: bool = True
    page_timeout_ms: int = 30_000

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def missing_required(self) -> list[str]:
        """Return the env-var names of required settings that are empty."""
        return [name.upper() for name in REQUIRED_SETTINGS if not getattr(self, name)]


def require_settings(cfg: Settings) -> Settings:
    """Fail fast when any required setting is absent."""
    missing = cfg.missing_required()
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + ", ".join(missing)
        )
    return cfg


# Singleton — import `settings` wherever needed.
settings = Settings()
