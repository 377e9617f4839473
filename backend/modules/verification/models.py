"""
Verification module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from modules.contacts.models import Contact
from modules.subscriptions.models import Subscription


class VerificationToken(BaseModel):
    """One double opt-in attempt for a (contact, list) pair."""

    id: str
    contact_id: str
    mailing_list_id: str
    token: str
    expires_at: datetime
    used_at: Optional[datetime] = None
    # Set when the subscription starts a new consent cycle
    revoked_at: Optional[datetime] = None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


class VerificationResult(BaseModel):
    """Contact and subscription after a successful verification."""

    contact: Contact
    subscription: Subscription


class VerificationErrorResponse(BaseModel):
    """Body of a failed verification request."""

    error: str
    detail: str
