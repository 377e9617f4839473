"""
Development verification mailer.

Logs verification emails instead of sending them and keeps them in
memory for test assertions. Production deployments plug the delivery
provider in behind IVerificationMailer.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from shared.clock import utc_now
from modules.mailing_lists.models import MailingList

logger = logging.getLogger(__name__)


@dataclass
class SentVerification:
    """Record of a logged verification email."""

    recipient: str
    mailing_list_slug: str
    verification_url: str
    logged_at: datetime


@dataclass
class LoggingVerificationMailer:
    """IVerificationMailer that logs instead of sending."""

    sent: list[SentVerification] = field(default_factory=list)

    async def send_verification(
        self,
        email: str,
        mailing_list: MailingList,
        verification_url: str,
    ) -> None:
        self.sent.append(
            SentVerification(
                recipient=email,
                mailing_list_slug=mailing_list.slug,
                verification_url=verification_url,
                logged_at=utc_now(),
            )
        )
        # The link carries the token, so it is not logged
        logger.info("Verification email for list %s queued to %s", mailing_list.slug, email)

    def clear(self) -> None:
        self.sent.clear()
