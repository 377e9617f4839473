"""
Storage handles for the repositories.

Production repositories share one Supabase client authenticated with the
service role key: signup, verification and webhook calls arrive without a
user session, so access control happens in the API layer. Tests and
``STORAGE_BACKEND=memory`` share one process-local InMemoryDatabase.
"""

import logging
from typing import Optional
from supabase import create_client, Client

from .config import Settings, get_settings
from .memory import InMemoryDatabase

logger = logging.getLogger(__name__)

REQUIRED_SUPABASE_SETTINGS = ("supabase_url", "supabase_service_role_key")

_service_client: Optional[Client] = None
_memory_database: Optional[InMemoryDatabase] = None


def _missing_supabase_settings(settings: Settings) -> list[str]:
    return [name.upper() for name in REQUIRED_SUPABASE_SETTINGS if not getattr(settings, name)]


def get_supabase_client() -> Client:
    """
    Shared service-role client, created on first use.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is not None:
        return _service_client

    settings = get_settings()
    missing = _missing_supabase_settings(settings)
    if missing:
        raise RuntimeError(f"Supabase configuration missing: set {' and '.join(missing)}")

    _service_client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    logger.info("Supabase client created for %s", settings.supabase_url)
    return _service_client


def get_memory_database() -> InMemoryDatabase:
    global _memory_database

    if _memory_database is None:
        logger.warning("Using the in-memory store; data is lost when the process exits")
        _memory_database = InMemoryDatabase()
    return _memory_database


def reset_client_cache() -> None:
    """Forget both storage handles (tests, configuration changes)."""
    global _service_client, _memory_database
    _service_client = None
    _memory_database = None
