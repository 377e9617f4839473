"""
Verification module interfaces.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from modules.mailing_lists.models import MailingList
from .models import VerificationResult, VerificationToken


@runtime_checkable
class IVerificationService(Protocol):
    """
    Interface for the verification token issuer.
    """

    async def issue_token(self, contact_id: str, mailing_list_id: str) -> VerificationToken:
        """
        Mint a single-use token for a pending subscription.

        Raises:
            VerificationRateLimitError: If the contact already received the
                maximum number of tokens in the rolling window
        """
        ...

    async def consume_token(
        self,
        token: Optional[str],
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> VerificationResult:
        """
        Use a token: verify the contact and confirm the subscription.

        The token, contact and subscription are updated atomically; on any
        failure nothing changes and the token stays unused.

        Raises:
            MissingTokenError: If no token was given
            TokenNotFoundError: If no token has this value
            TokenAlreadyUsedError: If the token was used before
            TokenExpiredError: If the token has expired
            SubscriptionStateError: If the subscription is no longer pending
        """
        ...

    def verification_url(self, token: VerificationToken) -> str:
        """Absolute link the recipient clicks to verify."""
        ...


@runtime_checkable
class IVerificationMailer(Protocol):
    """Sends the verification link; delivery itself is an external service."""

    async def send_verification(
        self,
        email: str,
        mailing_list: MailingList,
        verification_url: str,
    ) -> None: ...


@runtime_checkable
class IVerificationTokenRepository(Protocol):
    """Storage contract for verification tokens."""

    def count_recent(self, contact_id: str, since: datetime) -> int: ...

    def insert(self, data: dict[str, Any]) -> VerificationToken: ...

    def consume(
        self,
        token: str,
        now: datetime,
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> VerificationResult: ...
