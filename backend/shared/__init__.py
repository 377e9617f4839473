"""
Shared infrastructure for the Listkeeper backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory and the in-memory database
- exceptions: Base exception classes
- repository: Base repository and storage errors
- clock: Injectable time source

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .clock import Clock, utc_now
from .database import get_supabase_client, get_memory_database, reset_client_cache
from .exceptions import (
    ListkeeperError,
    ValidationError,
    NotFoundError,
    ConflictError,
    ConstraintError,
    StateError,
    RateLimitError,
    AuthenticationError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "Clock",
    "utc_now",
    "get_supabase_client",
    "get_memory_database",
    "reset_client_cache",
    "ListkeeperError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ConstraintError",
    "StateError",
    "RateLimitError",
    "AuthenticationError",
    "AuthenticatedUser",
]
