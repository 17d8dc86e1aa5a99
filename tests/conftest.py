"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach real external services
os.environ.setdefault("IMAGE_API_KEY", "")
os.environ.setdefault("EMAIL_API_KEY", "")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
