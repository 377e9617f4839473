"""
Subscription repositories.

Single-row reads and writes go straight to ``contact_subscriptions``.
Suppression (the contact and all of its subscriptions) and reopening a
row (the row and its outstanding verification tokens) each run as one
transaction: a Postgres function through RPC, or
``InMemoryDatabase.transaction()``.
"""

from datetime import datetime
from typing import Any, Optional

from shared.memory import CONTACTS, SUBSCRIPTIONS, VERIFICATION_TOKENS, InMemoryDatabase
from shared.repository import BaseRepository, ProcedureError, first_row, to_row
from . import transitions
from .models import BOUNCE_TYPES, Subscription, SuppressionReason

TABLE = "contact_subscriptions"

# Raised by the suppress_contact function when the contact row is missing
CONTACT_NOT_FOUND = "contact_not_found"


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for the ``contact_subscriptions`` table."""

    def get(self, contact_id: str, mailing_list_id: str) -> Optional[Subscription]:
        result = self._execute(
            self._db.table(TABLE)
            .select("*")
            .eq("contact_id", contact_id)
            .eq("mailing_list_id", mailing_list_id)
        )
        row = first_row(result)
        return Subscription.model_validate(row) if row else None

    def list_by_contact(self, contact_id: str) -> list[Subscription]:
        result = self._execute(
            self._db.table(TABLE).select("*").eq("contact_id", contact_id).order("created_at")
        )
        return [Subscription.model_validate(row) for row in result.data]

    def insert(self, data: dict[str, Any]) -> Subscription:
        result = self._execute(self._db.table(TABLE).insert(to_row(data)))
        return Subscription.model_validate(result.data[0])

    def update(self, subscription_id: str, changes: dict[str, Any]) -> Optional[Subscription]:
        result = self._execute(
            self._db.table(TABLE).update(to_row(changes)).eq("id", subscription_id)
        )
        row = first_row(result)
        return Subscription.model_validate(row) if row else None

    def reopen(
        self,
        subscription_id: str,
        changes: dict[str, Any],
        now: datetime,
    ) -> Optional[Subscription]:
        result = self._execute(
            self._db.rpc(
                "reopen_subscription",
                {
                    "p_subscription_id": subscription_id,
                    "p_changes": to_row(changes),
                    "p_now": now.isoformat(),
                },
            )
        )
        row = first_row(result)
        return Subscription.model_validate(row) if row else None

    def suppress_contact(
        self,
        contact_id: str,
        reason: SuppressionReason,
        details: dict[str, Any],
        now: datetime,
        mailing_list_id: Optional[str] = None,
    ) -> list[Subscription]:
        result = self._execute(
            self._db.rpc(
                "suppress_contact",
                {
                    "p_contact_id": contact_id,
                    "p_reason": reason.value,
                    "p_bounce_type": BOUNCE_TYPES[reason],
                    "p_details": details,
                    "p_now": now.isoformat(),
                    "p_mailing_list_id": mailing_list_id,
                },
            )
        )
        return [Subscription.model_validate(row) for row in result.data or []]


class InMemorySubscriptionRepository:
    """Subscription repository over the in-memory database."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get(self, contact_id: str, mailing_list_id: str) -> Optional[Subscription]:
        rows = self._db.select(SUBSCRIPTIONS, contact_id=contact_id, mailing_list_id=mailing_list_id)
        return Subscription.model_validate(rows[0]) if rows else None

    def list_by_contact(self, contact_id: str) -> list[Subscription]:
        return [
            Subscription.model_validate(row)
            for row in self._db.select(SUBSCRIPTIONS, contact_id=contact_id)
        ]

    def insert(self, data: dict[str, Any]) -> Subscription:
        return Subscription.model_validate(self._db.insert(SUBSCRIPTIONS, data))

    def update(self, subscription_id: str, changes: dict[str, Any]) -> Optional[Subscription]:
        row = self._db.update(SUBSCRIPTIONS, subscription_id, changes)
        return Subscription.model_validate(row) if row else None

    def reopen(
        self,
        subscription_id: str,
        changes: dict[str, Any],
        now: datetime,
    ) -> Optional[Subscription]:
        with self._db.transaction():
            current = self._db.get(SUBSCRIPTIONS, subscription_id)
            if current is None:
                return None

            outstanding = self._db.select(
                VERIFICATION_TOKENS,
                where=lambda row: row["used_at"] is None and row["revoked_at"] is None,
                contact_id=current["contact_id"],
                mailing_list_id=current["mailing_list_id"],
            )
            for token in outstanding:
                self._db.update(VERIFICATION_TOKENS, token["id"], {"revoked_at": now})

            row = self._db.update(SUBSCRIPTIONS, subscription_id, changes)
            return Subscription.model_validate(row)

    def suppress_contact(
        self,
        contact_id: str,
        reason: SuppressionReason,
        details: dict[str, Any],
        now: datetime,
        mailing_list_id: Optional[str] = None,
    ) -> list[Subscription]:
        with self._db.transaction():
            contact = self._db.get(CONTACTS, contact_id)
            if contact is None:
                raise ProcedureError(CONTACT_NOT_FOUND)

            filters = {"contact_id": contact_id}
            if mailing_list_id is not None:
                filters["mailing_list_id"] = mailing_list_id

            updated: list[Subscription] = []
            for row in self._db.select(SUBSCRIPTIONS, **filters):
                subscription = Subscription.model_validate(row)
                changes = transitions.suppress(subscription, reason, details, now)
                updated.append(
                    Subscription.model_validate(self._db.update(SUBSCRIPTIONS, subscription.id, changes))
                )

            self._db.update(
                CONTACTS,
                contact_id,
                {
                    "is_verified": False,
                    "metadata": transitions.suppress_contact_metadata(contact.get("metadata") or {}, reason),
                },
            )
            return updated
