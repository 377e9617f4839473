"""
Subscriptions module.

The subscription state machine: per (contact, list) status with its
transitions, timestamps and metadata.

Public API:
- ISubscriptionService: Interface for subscription transitions
- Subscription: A stored subscription
- SubscriptionStatus: pending / subscribed / unsubscribed / bounced
- SubscribeOptions: Options for subscribe (auto-confirm, opt-in evidence)
"""

from .interfaces import ISubscriptionService, ISubscriptionRepository
from .models import (
    Subscription,
    SubscriptionStatus,
    SuppressionReason,
    SubscribeOptions,
    SubscribeRequest,
    SubscribeResponse,
    UnsubscribeRequest,
    UnsubscribeResponse,
)
from .exceptions import (
    SubscriptionError,
    SubscriptionNotFoundError,
    AlreadySubscribedError,
    SubscriptionStateError,
)

__all__ = [
    # Interfaces
    "ISubscriptionService",
    "ISubscriptionRepository",
    # Models
    "Subscription",
    "SubscriptionStatus",
    "SuppressionReason",
    "SubscribeOptions",
    "SubscribeRequest",
    "SubscribeResponse",
    "UnsubscribeRequest",
    "UnsubscribeResponse",
    # Exceptions
    "SubscriptionError",
    "SubscriptionNotFoundError",
    "AlreadySubscribedError",
    "SubscriptionStateError",
]
