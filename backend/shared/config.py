"""
Listkeeper settings.

Every value can be overridden through the environment (or a local ``.env``
file); names are matched case-insensitively, so ``VERIFICATION_RATE_LIMIT=5``
sets ``verification_rate_limit``.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Listkeeper API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # uvicorn
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Authorization", "Content-Type"]

    # "memory" keeps everything in-process (tests, local demos)
    storage_backend: Literal["supabase", "memory"] = "supabase"

    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    # Direct Postgres URI, only needed by run_migrations.py
    supabase_db_url: str = ""

    verification_token_ttl_hours: int = 24
    verification_token_bytes: int = 32
    verification_rate_limit: int = 3
    verification_rate_window_seconds: int = 60

    newsletter_list_slug: str = "newsletter"

    # Where verification links point and where confirmed visitors land
    public_base_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:3000"
    confirmation_path: str = "/subscription-confirmed"


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
