"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating PostgREST errors into the storage
exceptions that both backends (Supabase and in-memory) raise.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar, Generic, Optional

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Postgres SQLSTATE codes surfaced through PostgREST
UNIQUE_VIOLATION = "23505"
RAISE_EXCEPTION = "P0001"

_CONSTRAINT_RE = re.compile(r'unique constraint "([^"]+)"')


class UniqueViolation(Exception):
    """A write violated a unique (or partial unique) constraint."""

    def __init__(self, constraint: str):
        super().__init__(f'duplicate key value violates unique constraint "{constraint}"')
        self.constraint = constraint


class ProcedureError(Exception):
    """A database function aborted its transaction with a named reason."""

    def __init__(self, reason: str, detail: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.detail = detail
        self.hint = hint


def to_row(data: dict[str, Any]) -> dict[str, Any]:
    """Convert Python values into JSON-safe column values."""
    row: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, Enum):
            row[key] = value.value
        else:
            row[key] = value
    return row


class BaseRepository(Generic[T]):
    """
    Base class for Supabase-backed repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Error translation via self._execute()
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ContactRepository(BaseRepository[Contact]):
            def get_by_id(self, contact_id: str) -> Optional[Contact]:
                result = self._execute(
                    self._db.table("contacts").select("*").eq("id", contact_id)
                )
                if not result.data:
                    return None
                return Contact.model_validate(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query, translating constraint errors.

        Raises:
            UniqueViolation: On SQLSTATE 23505.
            ProcedureError: When a database function raised an exception.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UniqueViolation(_constraint_name(e)) from e
            if e.code == RAISE_EXCEPTION:
                raise ProcedureError(e.message or "", e.details, e.hint) from e
            raise


def _constraint_name(error: APIError) -> str:
    text = " ".join(part for part in (error.message, error.details) if part)
    match = _CONSTRAINT_RE.search(text)
    return match.group(1) if match else ""


def first_row(result: Any) -> Optional[dict[str, Any]]:
    """Return the first row of a PostgREST result, or None."""
    if not result.data:
        return None
    return result.data[0]
