"""
Delivery event classification.

Only permanent signals suppress an address: hard bounces (including
``blocked``) and spam complaints. Soft bounces are expected to resolve on
their own and change nothing.
"""

from typing import Any, Optional

from modules.subscriptions.models import SuppressionReason
from .models import DeliveryEvent

BOUNCE_EVENTS = {"bounce"}
COMPLAINT_EVENTS = {"spamreport", "spam_report", "complaint"}

SOFT_BOUNCE_TYPES = {"soft", "deferred", "transient"}


def is_soft_bounce(event: DeliveryEvent) -> bool:
    """Soft by type, or by a 4.x.x enhanced status code."""
    if (event.type or "").lower() in SOFT_BOUNCE_TYPES:
        return True
    return (event.status or "").strip().startswith("4")


def classify(event: DeliveryEvent) -> Optional[SuppressionReason]:
    """Suppression reason for an event, or None when it changes nothing."""
    name = event.event.strip().lower()
    if name in BOUNCE_EVENTS:
        return None if is_soft_bounce(event) else SuppressionReason.HARD_BOUNCE
    if name in COMPLAINT_EVENTS:
        return SuppressionReason.SPAM_COMPLAINT
    return None


def suppression_details(reason: SuppressionReason, event: DeliveryEvent) -> dict[str, Any]:
    """Subscription metadata recorded alongside the suppression."""
    if reason == SuppressionReason.SPAM_COMPLAINT:
        return {"complaintType": event.type or "spam"}

    details = {
        "bounceType": event.type or "hard",
        "bounceStatus": event.status,
        "bounceDetails": event.reason,
    }
    return {key: value for key, value in details.items() if value is not None}
