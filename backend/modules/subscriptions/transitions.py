"""
Subscription state machine.

Each function takes the current row (or None) and returns the column
changes for one transition, or raises when the transition is illegal.
They do no I/O: the service and the repositories' atomic operations
apply the changes, and ``migrations/002_subscription_functions.sql``
implements the same rules for Postgres.

    absent        --subscribe-->             pending | subscribed (auto-confirm)
    pending       --subscribe(auto)-->       subscribed
    pending       --confirm (token)-->       subscribed
    unsubscribed  --subscribe-->             pending | subscribed (auto-confirm)
    bounced       --subscribe-->             pending (never auto-confirmed)
    pending|subscribed --unsubscribe-->      unsubscribed
    any           --suppress-->              bounced
"""

import logging
from datetime import datetime
from typing import Any, Optional

from .exceptions import AlreadySubscribedError, SubscriptionStateError
from .models import (
    BOUNCE_TYPES,
    SubscribeOptions,
    Subscription,
    SubscriptionStatus,
    SuppressionReason,
)

logger = logging.getLogger(__name__)

Changes = dict[str, Any]

UNSPECIFIED_REASON = "unspecified"

# Metadata describing the last opt-out; moved under PREVIOUS_OPT_OUT on resubscribe
OPT_OUT_KEYS = ("reason", "optOutReason", "bounceType", "bounceStatus", "bounceDetails", "complaintType")
PREVIOUS_OPT_OUT = "previousOptOut"


def new_subscription(
    contact_id: str,
    mailing_list_id: str,
    options: SubscribeOptions,
    now: datetime,
) -> Changes:
    """Row for a first subscribe call."""
    return {
        "contact_id": contact_id,
        "mailing_list_id": mailing_list_id,
        "status": SubscriptionStatus.SUBSCRIBED if options.auto_confirm else SubscriptionStatus.PENDING,
        "opt_in_at": now if options.auto_confirm else None,
        "opt_in_ip": options.opt_in_ip,
        "opt_in_user_agent": options.opt_in_user_agent,
        "metadata": {},
    }


def resubscribe(
    subscription: Subscription,
    options: SubscribeOptions,
    now: datetime,
) -> Optional[Changes]:
    """
    Changes for subscribing again to an existing row.

    Returns None when the call is a no-op (already pending, no auto-confirm).

    Raises:
        AlreadySubscribedError: If the row is already subscribed
    """
    status = subscription.status

    if status == SubscriptionStatus.SUBSCRIBED:
        raise AlreadySubscribedError(subscription.contact_id, subscription.mailing_list_id)

    auto_confirm = options.auto_confirm
    if status == SubscriptionStatus.BOUNCED and auto_confirm:
        # A suppressed address must prove itself again
        logger.warning(
            "Ignoring auto-confirm for bounced subscription %s; verification required",
            subscription.id,
        )
        auto_confirm = False

    if status == SubscriptionStatus.PENDING and not auto_confirm:
        return None

    changes: Changes = {
        "status": SubscriptionStatus.SUBSCRIBED if auto_confirm else SubscriptionStatus.PENDING,
        "opt_in_at": now if auto_confirm else None,
    }
    opt_out = {key: subscription.metadata[key] for key in OPT_OUT_KEYS if key in subscription.metadata}
    if opt_out:
        metadata = {key: value for key, value in subscription.metadata.items() if key not in OPT_OUT_KEYS}
        metadata[PREVIOUS_OPT_OUT] = opt_out
        changes["metadata"] = metadata
    if options.opt_in_ip is not None:
        changes["opt_in_ip"] = options.opt_in_ip
    if options.opt_in_user_agent is not None:
        changes["opt_in_user_agent"] = options.opt_in_user_agent
    return changes


def confirm(
    subscription: Subscription,
    now: datetime,
    opt_in_ip: Optional[str] = None,
    opt_in_user_agent: Optional[str] = None,
) -> Changes:
    """
    Changes for confirming a pending subscription through its token.

    Raises:
        SubscriptionStateError: If the subscription is not pending
    """
    if subscription.status != SubscriptionStatus.PENDING:
        raise SubscriptionStateError(subscription.id, subscription.status.value, "confirm")

    return {
        "status": SubscriptionStatus.SUBSCRIBED,
        "opt_in_at": now,
        "opt_in_ip": opt_in_ip or subscription.opt_in_ip,
        "opt_in_user_agent": opt_in_user_agent or subscription.opt_in_user_agent,
    }


def unsubscribe(
    subscription: Subscription,
    reason: Optional[str],
    now: datetime,
) -> Optional[Changes]:
    """
    Changes for a voluntary opt-out; opt_in_at is left untouched.

    Returns None for rows that are already unsubscribed or bounced.
    """
    if subscription.status not in (SubscriptionStatus.PENDING, SubscriptionStatus.SUBSCRIBED):
        return None

    return {
        "status": SubscriptionStatus.UNSUBSCRIBED,
        "opt_out_at": now,
        "metadata": {**subscription.metadata, "reason": reason or UNSPECIFIED_REASON},
    }


def suppress(
    subscription: Subscription,
    reason: SuppressionReason,
    details: dict[str, Any],
    now: datetime,
) -> Changes:
    """Changes forcing any subscription to bounced."""
    changes: Changes = {
        "status": SubscriptionStatus.BOUNCED,
        "metadata": {**subscription.metadata, **details, "optOutReason": reason.value},
    }
    # Replaying the same event keeps the first opt-out time
    if subscription.status != SubscriptionStatus.BOUNCED:
        changes["opt_out_at"] = now
    return changes


def suppress_contact_metadata(
    metadata: dict[str, Any],
    reason: SuppressionReason,
) -> dict[str, Any]:
    """Contact metadata after a suppression."""
    return {**metadata, "bounceType": BOUNCE_TYPES[reason]}
