"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real mail relay or database
os.environ.setdefault("JWT_SECRET", "test-signing-secret")
os.environ.setdefault("SMTP_HOST", "")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
