"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
