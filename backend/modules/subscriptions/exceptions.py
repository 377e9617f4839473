"""
Subscriptions module exceptions.
"""

from shared.exceptions import ListkeeperError, NotFoundError, ConflictError, StateError


class SubscriptionError(ListkeeperError):
    """Base exception for subscription-related errors."""

    pass


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a contact has no subscription to a list."""

    def __init__(self, contact_id: str, mailing_list_id: str):
        super().__init__(
            "Subscription not found",
            code="SUBSCRIPTION_NOT_FOUND",
            details={"contact_id": contact_id, "mailing_list_id": mailing_list_id},
        )


class AlreadySubscribedError(ConflictError):
    """Raised when subscribing a contact that is already subscribed."""

    def __init__(self, contact_id: str, mailing_list_id: str):
        super().__init__(
            "You are already subscribed to this list",
            code="ALREADY_SUBSCRIBED",
            details={"contact_id": contact_id, "mailing_list_id": mailing_list_id},
        )


class SubscriptionStateError(StateError):
    """Raised when a transition is not allowed from the current status."""

    def __init__(self, subscription_id: str, status: str, action: str):
        super().__init__(
            f"Cannot {action} a subscription in status '{status}'",
            code="INVALID_SUBSCRIPTION_STATE",
            details={"subscription_id": subscription_id, "status": status, "action": action},
        )
