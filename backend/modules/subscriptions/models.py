"""
Subscriptions module data models.

A subscription is one contact's relationship to one mailing list.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SubscriptionStatus(str, Enum):
    """Subscription state."""

    PENDING = "pending"            # Waiting for the verification link
    SUBSCRIBED = "subscribed"      # Consent confirmed
    UNSUBSCRIBED = "unsubscribed"  # Contact opted out
    BOUNCED = "bounced"            # Suppressed by delivery feedback


class SuppressionReason(str, Enum):
    """Why delivery feedback suppressed an address."""

    HARD_BOUNCE = "hard-bounce"
    SPAM_COMPLAINT = "spam-complaint"


# Contact.metadata["bounceType"] written for each reason
BOUNCE_TYPES: dict[SuppressionReason, str] = {
    SuppressionReason.HARD_BOUNCE: "hard",
    SuppressionReason.SPAM_COMPLAINT: "complaint",
}


class Subscription(BaseModel):
    """A stored contact subscription row."""

    id: str
    contact_id: str
    mailing_list_id: str
    status: SubscriptionStatus
    opt_in_at: Optional[datetime] = None
    opt_out_at: Optional[datetime] = None
    opt_in_ip: Optional[str] = None
    opt_in_user_agent: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class SubscribeOptions(BaseModel):
    """Options for a subscribe call."""

    auto_confirm: bool = Field(
        default=False,
        description="Skip the verification token; consent came from a trusted channel",
    )
    opt_in_ip: Optional[str] = None
    opt_in_user_agent: Optional[str] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubscribeRequest(_CamelModel):
    """Body of the public signup endpoint."""

    email: str = Field(..., max_length=320)
    mailing_list_id: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=64)

    @model_validator(mode="after")
    def require_list(self) -> "SubscribeRequest":
        if not self.mailing_list_id and not self.slug:
            raise ValueError("Either mailingListId or slug is required")
        return self


class SubscribeResponse(_CamelModel):
    """Result of a signup."""

    success: bool = True
    message: str
    status: SubscriptionStatus
    contact_id: str
    mailing_list_id: str


class UnsubscribeRequest(_CamelModel):
    """Body of the unsubscribe endpoint."""

    contact_id: str
    mailing_list_id: str
    reason: Optional[str] = Field(None, max_length=500)


class UnsubscribeResponse(_CamelModel):
    success: bool = True
    message: str = "Successfully unsubscribed from mailing list"
    subscription: Subscription
