"""
Suppression module data models.

Delivery events follow the mail provider's event webhook: one object per
event with the recipient address and provider-specific detail fields.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DeliveryEvent(BaseModel):
    """One delivery-feedback event from the mail provider."""

    model_config = ConfigDict(extra="allow")  # Providers send many more fields

    event: str
    email: str
    type: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None


class EventOutcome(str, Enum):
    """What processing did with one event."""

    SUPPRESSED = "suppressed"                # Contact suppressed
    IGNORED = "ignored"                      # Soft bounce or non-suppressing event
    UNKNOWN_RECIPIENT = "unknown_recipient"  # No contact for the address
    FAILED = "failed"                        # Processing raised; batch continued


class EventResult(BaseModel):
    """Outcome of one event, in input order."""

    index: int
    email: str
    event: str
    outcome: EventOutcome
    detail: Optional[str] = None


class SuppressionBatchResult(BaseModel):
    """Summary returned to the webhook caller."""

    received: bool = True
    processed: int = 0
    suppressed: int = 0
    ignored: int = 0
    failed: int = 0
    results: list[EventResult] = Field(default_factory=list)
