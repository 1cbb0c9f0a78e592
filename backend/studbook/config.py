"""Studbook settings — read from the environment (or .env) by pydantic-settings.

Invariants:
    - database_url always names an async driver: plain postgresql:// URLs are rewritten
      to postgresql+asyncpg://, sqlite+aiosqlite:// is passed through for local runs
    - get_settings() is cached; the API and alembic share one instance per process
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = "postgresql+asyncpg://studbook:studbook@db:5432/studbook"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    # "json" for log shippers, anything else for plain text
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
