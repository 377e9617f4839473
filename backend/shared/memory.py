"""
Process-local database used by the in-memory repositories.

Mirrors the Postgres schema in ``migrations/``: the same four tables, the
same unique and partial-unique constraints, and ``ON DELETE CASCADE`` from
contacts (and mailing lists) to their subscriptions and tokens. Rows are
plain dicts shaped like the rows PostgREST returns, so repositories can
map them with the same pydantic models.

``transaction()`` serializes writers on one re-entrant lock and restores
a snapshot of every table if the block raises.
"""

import copy
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from .clock import Clock, utc_now
from .repository import UniqueViolation

Row = dict[str, Any]

CONTACTS = "contacts"
MAILING_LISTS = "mailing_lists"
SUBSCRIPTIONS = "contact_subscriptions"
VERIFICATION_TOKENS = "contact_verification_tokens"


@dataclass(frozen=True)
class UniqueConstraint:
    """Unique index over ``columns``, optionally partial (``where``)."""

    name: str
    columns: tuple[str, ...]
    where: Optional[Callable[[Row], bool]] = None

    def key(self, row: Row) -> Optional[tuple]:
        if self.where is not None and not self.where(row):
            return None
        return tuple(row.get(column) for column in self.columns)


CONSTRAINTS: dict[str, tuple[UniqueConstraint, ...]] = {
    CONTACTS: (
        UniqueConstraint("uniq_contacts_value_kind", ("kind", "value")),
        UniqueConstraint(
            "uniq_contacts_primary_per_owner",
            ("owner_account_id", "kind"),
            where=lambda row: bool(row.get("is_primary")) and row.get("owner_account_id") is not None,
        ),
    ),
    MAILING_LISTS: (UniqueConstraint("uniq_mailing_lists_slug", ("slug",)),),
    SUBSCRIPTIONS: (
        UniqueConstraint("uniq_contact_subscription", ("contact_id", "mailing_list_id")),
    ),
    VERIFICATION_TOKENS: (UniqueConstraint("uniq_verification_token", ("token",)),),
}

# parent table -> (child table, foreign key column)
CASCADES: dict[str, tuple[tuple[str, str], ...]] = {
    CONTACTS: ((SUBSCRIPTIONS, "contact_id"), (VERIFICATION_TOKENS, "contact_id")),
    MAILING_LISTS: ((SUBSCRIPTIONS, "mailing_list_id"), (VERIFICATION_TOKENS, "mailing_list_id")),
}

# Columns Postgres fills in when an insert leaves them out
COLUMN_DEFAULTS: dict[str, Row] = {
    CONTACTS: {
        "owner_account_id": None,
        "is_primary": False,
        "is_verified": False,
        "verified_at": None,
        "source": "manual",
        "metadata": {},
    },
    MAILING_LISTS: {"description": None, "is_active": True, "is_default": False},
    SUBSCRIPTIONS: {
        "status": "pending",
        "opt_in_at": None,
        "opt_in_ip": None,
        "opt_in_user_agent": None,
        "opt_out_at": None,
        "metadata": {},
    },
    VERIFICATION_TOKENS: {"used_at": None, "revoked_at": None},
}

# Tokens are append-only apart from used_at/revoked_at and carry no updated_at column
TIMESTAMPED = {CONTACTS, MAILING_LISTS, SUBSCRIPTIONS}


class InMemoryDatabase:
    """Four-table in-process store with constraint and cascade enforcement."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_now
        self._tables: dict[str, dict[str, Row]] = {name: {} for name in CONSTRAINTS}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["InMemoryDatabase"]:
        """Run a block atomically; every table is restored if it raises."""
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self
            except BaseException:
                self._tables = snapshot
                raise

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, table: str, row_id: str) -> Optional[Row]:
        with self._lock:
            row = self._tables[table].get(row_id)
            return copy.deepcopy(row) if row is not None else None

    def select(
        self,
        table: str,
        where: Optional[Callable[[Row], bool]] = None,
        **equals: Any,
    ) -> list[Row]:
        """Rows matching every ``column=value`` pair and ``where``, oldest first."""
        with self._lock:
            rows = [
                copy.deepcopy(row)
                for row in self._tables[table].values()
                if _matches(row, equals) and (where is None or where(row))
            ]
        return sorted(rows, key=lambda row: row["created_at"])

    def count(
        self,
        table: str,
        where: Optional[Callable[[Row], bool]] = None,
        **equals: Any,
    ) -> int:
        return len(self.select(table, where, **equals))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, table: str, data: Row) -> Row:
        with self._lock:
            now = self._clock()
            row = _plain(data)
            for column, default in COLUMN_DEFAULTS[table].items():
                row.setdefault(column, copy.deepcopy(default))
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", now)
            if table in TIMESTAMPED:
                row.setdefault("updated_at", now)
            self._check_unique(table, row)
            self._tables[table][row["id"]] = row
            return copy.deepcopy(row)

    def update(self, table: str, row_id: str, changes: Row) -> Optional[Row]:
        with self._lock:
            current = self._tables[table].get(row_id)
            if current is None:
                return None
            row = {**current, **_plain(changes)}
            if table in TIMESTAMPED and "updated_at" not in changes:
                row["updated_at"] = self._clock()
            self._check_unique(table, row)
            self._tables[table][row_id] = row
            return copy.deepcopy(row)

    def delete(self, table: str, **equals: Any) -> list[Row]:
        """Delete matching rows and cascade to dependent tables."""
        with self._lock:
            doomed = [row for row in self._tables[table].values() if _matches(row, equals)]
            for row in doomed:
                del self._tables[table][row["id"]]
                for child, column in CASCADES.get(table, ()):
                    self.delete(child, **{column: row["id"]})
            return copy.deepcopy(doomed)

    def _check_unique(self, table: str, row: Row) -> None:
        for constraint in CONSTRAINTS[table]:
            key = constraint.key(row)
            if key is None:
                continue
            for other in self._tables[table].values():
                if other["id"] != row["id"] and constraint.key(other) == key:
                    raise UniqueViolation(constraint.name)


def _matches(row: Row, equals: dict[str, Any]) -> bool:
    return all(row.get(column) == value for column, value in equals.items())


def _plain(data: Row) -> Row:
    return {
        key: value.value if isinstance(value, Enum) else copy.deepcopy(value)
        for key, value in data.items()
    }
