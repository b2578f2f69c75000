"""Root conftest — shared test configuration."""

import os

# Settings are read at import of proofpot.main; pin a safe test configuration
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("ACCESS_MODE", "owner_gated")
os.environ.setdefault(
    "ADMINISTRATOR_ADDRESS", "0x1111111111111111111111111111111111111111",
)
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
