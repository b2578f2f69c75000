"""Settings — access mode validation and creator-source defaults."""

import pytest
from pydantic import ValidationError

from proofpot.config import Settings
from proofpot.core.domain_types import AccessMode, CreatorSource, StorageBackend

ADMIN = "0x" + "11" * 20


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_owner_gated_requires_administrator():
    with pytest.raises(ValidationError):
        _settings(access_mode=AccessMode.OWNER_GATED, administrator_address="")


def test_owner_gated_rejects_null_administrator():
    with pytest.raises(ValidationError):
        _settings(
            access_mode=AccessMode.OWNER_GATED,
            administrator_address="0x" + "00" * 20,
        )


def test_administrator_is_canonicalized():
    settings = _settings(administrator_address="0x" + "AB" * 20)
    assert settings.administrator == "0x" + "ab" * 20


def test_open_mode_needs_no_administrator():
    settings = _settings(access_mode=AccessMode.OPEN, administrator_address=None)
    assert settings.administrator is None


def test_creator_source_defaults_follow_access_mode():
    gated = _settings(administrator_address=ADMIN)
    open_ = _settings(access_mode=AccessMode.OPEN, administrator_address=None)
    assert gated.effective_creator_source is CreatorSource.EXPLICIT
    assert open_.effective_creator_source is CreatorSource.CALLER


def test_explicit_creator_source_wins():
    settings = _settings(
        administrator_address=ADMIN, creator_source=CreatorSource.CALLER,
    )
    assert settings.effective_creator_source is CreatorSource.CALLER


def test_postgres_url_rewritten_for_asyncpg():
    settings = _settings(
        administrator_address=ADMIN,
        database_url="postgresql://u:p@host:5432/db",
    )
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "database")
    monkeypatch.setenv("ACCESS_MODE", "open")
    monkeypatch.setenv("MINT_LATENCY_MS", "250")
    settings = _settings()
    assert settings.storage_backend is StorageBackend.DATABASE
    assert settings.access_mode is AccessMode.OPEN
    assert settings.mint_latency_ms == 250
