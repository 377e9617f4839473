"""
Verification token issuer.

Tokens are 32 random bytes, URL-safe base64 encoded (43 characters),
valid for 24 hours and usable once. Issuance is rate limited per contact
by counting that contact's recent tokens in the store, so the limit holds
across any number of API processes.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from shared.clock import Clock, utc_now
from shared.repository import ProcedureError
from modules.subscriptions.exceptions import SubscriptionNotFoundError, SubscriptionStateError

from .exceptions import (
    MissingTokenError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
    VerificationRateLimitError,
)
from .interfaces import IVerificationService, IVerificationTokenRepository
from .models import VerificationResult, VerificationToken
from .repository import (
    ALREADY_USED,
    EXPIRED_TOKEN,
    INVALID_TOKEN,
    SUBSCRIPTION_NOT_FOUND,
    SUBSCRIPTION_NOT_PENDING,
)

logger = logging.getLogger(__name__)

VERIFY_PATH = "/api/verify-email"


class VerificationService(IVerificationService):
    """
    Verification service.

    Implements IVerificationService on top of an IVerificationTokenRepository.
    """

    def __init__(
        self,
        repository: IVerificationTokenRepository,
        clock: Optional[Clock] = None,
        token_ttl_hours: int = 24,
        token_bytes: int = 32,
        rate_limit: int = 3,
        rate_window_seconds: int = 60,
        public_base_url: str = "http://localhost:8000",
    ):
        self._repository = repository
        self._clock = clock or utc_now
        self._token_ttl = timedelta(hours=token_ttl_hours)
        self._token_bytes = token_bytes
        self._rate_limit = rate_limit
        self._rate_window = timedelta(seconds=rate_window_seconds)
        self._public_base_url = public_base_url.rstrip("/")

    async def issue_token(self, contact_id: str, mailing_list_id: str) -> VerificationToken:
        now = self._clock()

        recent = self._repository.count_recent(contact_id, now - self._rate_window)
        if recent >= self._rate_limit:
            logger.warning(
                "Verification rate limit hit for contact %s (%d tokens in %ss)",
                contact_id,
                recent,
                int(self._rate_window.total_seconds()),
            )
            raise VerificationRateLimitError(
                contact_id, self._rate_limit, int(self._rate_window.total_seconds())
            )

        record = self._repository.insert(
            {
                "contact_id": contact_id,
                "mailing_list_id": mailing_list_id,
                "token": secrets.token_urlsafe(self._token_bytes),
                "expires_at": now + self._token_ttl,
                "created_at": now,
            }
        )
        logger.info("Issued verification token %s for contact %s", record.id, contact_id)
        return record

    async def consume_token(
        self,
        token: Optional[str],
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> VerificationResult:
        if not token:
            raise MissingTokenError()

        try:
            result = self._repository.consume(token, self._clock(), opt_in_ip, opt_in_user_agent)
        except ProcedureError as e:
            raise self._token_error(e) from e

        logger.info(
            "Contact %s verified; subscription %s confirmed",
            result.contact.id,
            result.subscription.id,
        )
        return result

    def verification_url(self, token: VerificationToken) -> str:
        return f"{self._public_base_url}{VERIFY_PATH}?{urlencode({'token': token.token})}"

    def _token_error(self, error: ProcedureError) -> Exception:
        if error.reason == INVALID_TOKEN:
            return TokenNotFoundError()
        if error.reason == ALREADY_USED:
            return TokenAlreadyUsedError()
        if error.reason == EXPIRED_TOKEN:
            return TokenExpiredError()
        if error.reason == SUBSCRIPTION_NOT_PENDING:
            # DETAIL carries the subscription id, HINT its status
            return SubscriptionStateError(error.detail or "", error.hint or "unknown", "confirm")
        if error.reason == SUBSCRIPTION_NOT_FOUND:
            # DETAIL carries the contact id, HINT the mailing list id
            return SubscriptionNotFoundError(error.detail or "", error.hint or "")
        return error
