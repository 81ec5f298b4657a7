"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database or a real signing key
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")
