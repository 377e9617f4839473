"""
Verification token repositories.

Token consumption updates three tables (token, contact, subscription) and
must either fully apply or not at all. The Supabase repository delegates
it to the ``consume_verification_token`` Postgres function, which locks
the token row ``FOR UPDATE`` so that of two concurrent requests with the
same token only the first succeeds. The in-memory repository gets the
same guarantee from ``InMemoryDatabase.transaction()``.

Both signal token problems with ``ProcedureError`` reasons; the service
maps them to domain errors.
"""

from datetime import datetime
from typing import Any, Optional

from shared.memory import CONTACTS, SUBSCRIPTIONS, VERIFICATION_TOKENS, InMemoryDatabase
from shared.repository import BaseRepository, ProcedureError, to_row
from modules.contacts.models import Contact
from modules.subscriptions import transitions
from modules.subscriptions.models import Subscription, SubscriptionStatus
from .models import VerificationResult, VerificationToken

TABLE = "contact_verification_tokens"

INVALID_TOKEN = "invalid_token"
EXPIRED_TOKEN = "expired_token"
ALREADY_USED = "already_used"
SUBSCRIPTION_NOT_FOUND = "subscription_not_found"
SUBSCRIPTION_NOT_PENDING = "subscription_not_pending"


class VerificationTokenRepository(BaseRepository[VerificationToken]):
    """Repository for ``contact_verification_tokens``."""

    def count_recent(self, contact_id: str, since: datetime) -> int:
        """Tokens issued to a contact after ``since``."""
        result = self._execute(
            self._db.table(TABLE)
            .select("id", count="exact")
            .eq("contact_id", contact_id)
            .gt("created_at", since.isoformat())
        )
        return result.count or 0

    def insert(self, data: dict[str, Any]) -> VerificationToken:
        result = self._execute(self._db.table(TABLE).insert(to_row(data)))
        return VerificationToken.model_validate(result.data[0])

    def consume(
        self,
        token: str,
        now: datetime,
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> VerificationResult:
        result = self._execute(
            self._db.rpc(
                "consume_verification_token",
                {
                    "p_token": token,
                    "p_now": now.isoformat(),
                    "p_opt_in_ip": opt_in_ip,
                    "p_opt_in_user_agent": opt_in_user_agent,
                },
            )
        )
        return VerificationResult.model_validate(result.data)


class InMemoryVerificationTokenRepository:
    """Verification token repository over the in-memory database."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def count_recent(self, contact_id: str, since: datetime) -> int:
        return self._db.count(
            VERIFICATION_TOKENS,
            where=lambda row: row["created_at"] > since,
            contact_id=contact_id,
        )

    def insert(self, data: dict[str, Any]) -> VerificationToken:
        return VerificationToken.model_validate(self._db.insert(VERIFICATION_TOKENS, data))

    def consume(
        self,
        token: str,
        now: datetime,
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> VerificationResult:
        with self._db.transaction():
            rows = self._db.select(VERIFICATION_TOKENS, token=token)
            if not rows:
                raise ProcedureError(INVALID_TOKEN)

            record = VerificationToken.model_validate(rows[0])
            if record.is_revoked:
                raise ProcedureError(INVALID_TOKEN)
            if record.is_used:
                raise ProcedureError(ALREADY_USED)
            if record.is_expired(now):
                raise ProcedureError(EXPIRED_TOKEN)

            subscription_rows = self._db.select(
                SUBSCRIPTIONS,
                contact_id=record.contact_id,
                mailing_list_id=record.mailing_list_id,
            )
            if not subscription_rows:
                raise ProcedureError(SUBSCRIPTION_NOT_FOUND, record.contact_id, record.mailing_list_id)
            subscription = Subscription.model_validate(subscription_rows[0])
            if subscription.status != SubscriptionStatus.PENDING:
                raise ProcedureError(
                    SUBSCRIPTION_NOT_PENDING, subscription.id, subscription.status.value
                )

            changes = transitions.confirm(subscription, now, opt_in_ip, opt_in_user_agent)

            self._db.update(VERIFICATION_TOKENS, record.id, {"used_at": now})
            contact = self._db.update(
                CONTACTS, record.contact_id, {"is_verified": True, "verified_at": now}
            )
            confirmed = self._db.update(SUBSCRIPTIONS, subscription.id, changes)

            return VerificationResult(
                contact=Contact.model_validate(contact),
                subscription=Subscription.model_validate(confirmed),
            )
