"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - owner_gated access mode always has a valid, non-null administrator address
    - creator_source resolves to a concrete CreatorSource (default depends on access_mode)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Memory storage by default: the core runs without PostgreSQL for demos and tests
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from proofpot.core.domain_types import (
    AccessMode, CreatorSource, Identity, StorageBackend,
    is_null_identity, normalize_identity,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    storage_backend: StorageBackend = StorageBackend.MEMORY
    database_url: str = (
        "postgresql+asyncpg://proofpot:proofpot@db:5432/proofpot"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Access control
    access_mode: AccessMode = AccessMode.OWNER_GATED
    administrator_address: str | None = None
    creator_source: CreatorSource | None = None

    @field_validator("administrator_address", mode="before")
    @classmethod
    def normalize_administrator(cls, v: str | None) -> str | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return normalize_identity(v)

    @model_validator(mode="after")
    def require_administrator_when_gated(self):
        if self.access_mode is AccessMode.OWNER_GATED and is_null_identity(
            self.administrator_address,
        ):
            raise ValueError(
                "owner_gated access mode requires a non-zero administrator_address",
            )
        return self

    # Ledger
    mint_latency_ms: int = 0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def administrator(self) -> Identity | None:
        return Identity(self.administrator_address) if self.administrator_address else None

    @property
    def effective_creator_source(self) -> CreatorSource:
        """Explicit creator under owner_gated, caller-is-creator under open."""
        if self.creator_source is not None:
            return self.creator_source
        if self.access_mode is AccessMode.OPEN:
            return CreatorSource.CALLER
        return CreatorSource.EXPLICIT


@lru_cache
def get_settings() -> Settings:
    return Settings()
