"""Tests for the verification token issuer."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from modules.subscriptions.exceptions import SubscriptionNotFoundError, SubscriptionStateError
from modules.subscriptions.models import SubscribeOptions, SubscriptionStatus, SuppressionReason
from modules.verification.exceptions import (
    MissingTokenError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
    VerificationRateLimitError,
)
from modules.verification.models import VerificationToken
from modules.verification.service import VerificationService


@pytest.fixture
def newsletter(mailing_lists):
    return mailing_lists["newsletter"]


@pytest.fixture
def pending(container, contact, newsletter):
    """A pending newsletter subscription for ``contact``."""
    return container.subscription_repository.insert(
        {"contact_id": contact.id, "mailing_list_id": newsletter.id, "status": SubscriptionStatus.PENDING}
    )


class TestIssueToken:
    @pytest.mark.asyncio
    async def test_token_shape(self, container, contact, newsletter, clock):
        token = await container.verification.issue_token(contact.id, newsletter.id)

        assert len(token.token) == 43
        assert token.created_at == clock.now
        assert token.expires_at == clock.now + timedelta(hours=24)
        assert token.used_at is None

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, container, contact, newsletter, clock):
        first = await container.verification.issue_token(contact.id, newsletter.id)
        clock.advance(minutes=5)
        second = await container.verification.issue_token(contact.id, newsletter.id)

        assert first.token != second.token

    @pytest.mark.asyncio
    async def test_fourth_request_in_window_is_refused(self, container, contact, newsletter, clock):
        for _ in range(3):
            await container.verification.issue_token(contact.id, newsletter.id)
            clock.advance(seconds=10)

        with pytest.raises(VerificationRateLimitError) as exc_info:
            await container.verification.issue_token(contact.id, newsletter.id)

        assert exc_info.value.status_code == 429
        assert exc_info.value.details["limit"] == 3

    @pytest.mark.asyncio
    async def test_window_slides(self, container, contact, newsletter, clock):
        for _ in range(3):
            await container.verification.issue_token(contact.id, newsletter.id)
        clock.advance(seconds=61)

        token = await container.verification.issue_token(contact.id, newsletter.id)

        assert token.created_at == clock.now

    @pytest.mark.asyncio
    async def test_limit_is_per_contact(self, container, contact, newsletter):
        other = container.contact_repository.insert(
            {"kind": "email", "value": "other@example.com", "source": "signup_form"}
        )
        for _ in range(3):
            await container.verification.issue_token(contact.id, newsletter.id)

        assert await container.verification.issue_token(other.id, newsletter.id)

    @pytest.mark.asyncio
    async def test_configured_limits(self, container, contact, newsletter, clock):
        service = VerificationService(
            repository=container.verification_repository,
            clock=clock,
            token_ttl_hours=1,
            token_bytes=16,
            rate_limit=1,
            rate_window_seconds=10,
        )
        token = await service.issue_token(contact.id, newsletter.id)

        assert len(token.token) == 22
        with pytest.raises(VerificationRateLimitError):
            await service.issue_token(contact.id, newsletter.id)

    def test_verification_url(self, container, clock):
        token = VerificationToken(
            id="token-1",
            contact_id="contact-1",
            mailing_list_id="list-1",
            token="abc_-123",
            expires_at=clock.now,
            created_at=clock.now,
        )
        assert (
            container.verification.verification_url(token)
            == "https://api.example.com/api/verify-email?token=abc_-123"
        )


class TestConsumeToken:
    @pytest.mark.asyncio
    async def test_confirms_subscription(self, container, contact, newsletter, pending, clock):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        clock.advance(minutes=10)

        result = await container.verification.consume_token(
            token.token, opt_in_ip="203.0.113.7", opt_in_user_agent="Mozilla/5.0"
        )

        assert result.subscription.status == SubscriptionStatus.SUBSCRIBED
        assert result.subscription.opt_in_at == clock.now
        assert result.subscription.opt_in_ip == "203.0.113.7"
        assert result.subscription.opt_in_user_agent == "Mozilla/5.0"
        assert result.contact.is_verified is True
        assert result.contact.verified_at == clock.now

    @pytest.mark.asyncio
    async def test_missing_token(self, container):
        with pytest.raises(MissingTokenError):
            await container.verification.consume_token(None)
        with pytest.raises(MissingTokenError):
            await container.verification.consume_token("")

    @pytest.mark.asyncio
    async def test_unknown_token(self, container):
        with pytest.raises(TokenNotFoundError):
            await container.verification.consume_token("does-not-exist")

    @pytest.mark.asyncio
    async def test_second_use(self, container, contact, newsletter, pending):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        await container.verification.consume_token(token.token)

        with pytest.raises(TokenAlreadyUsedError):
            await container.verification.consume_token(token.token)

    @pytest.mark.asyncio
    async def test_expired_token_changes_nothing(self, container, contact, newsletter, pending, clock):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        clock.advance(hours=24, seconds=1)

        with pytest.raises(TokenExpiredError):
            await container.verification.consume_token(token.token)

        subscription = container.subscription_repository.get(contact.id, newsletter.id)
        assert subscription.status == SubscriptionStatus.PENDING
        assert container.contact_repository.get_by_id(contact.id).is_verified is False

    @pytest.mark.asyncio
    async def test_token_valid_until_expiry(self, container, contact, newsletter, pending, clock):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        clock.advance(hours=24)

        result = await container.verification.consume_token(token.token)

        assert result.subscription.status == SubscriptionStatus.SUBSCRIBED

    @pytest.mark.asyncio
    async def test_used_wins_over_expired(self, container, contact, newsletter, pending, clock):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        await container.verification.consume_token(token.token)
        clock.advance(days=2)

        with pytest.raises(TokenAlreadyUsedError):
            await container.verification.consume_token(token.token)

    @pytest.mark.asyncio
    async def test_subscription_no_longer_pending(self, container, database, contact, newsletter, pending):
        token = await container.verification.issue_token(contact.id, newsletter.id)
        await container.subscriptions.unsubscribe(contact.id, newsletter.id)

        with pytest.raises(SubscriptionStateError) as exc_info:
            await container.verification.consume_token(token.token)

        assert exc_info.value.details["status"] == "unsubscribed"
        assert exc_info.value.details["subscription_id"] == pending.id
        rows = database.select("contact_verification_tokens", token=token.token)
        assert rows[0]["used_at"] is None

    @pytest.mark.asyncio
    async def test_subscription_missing_reports_pair(self, container, contact, newsletter, clock):
        # No subscription row for this (contact, list) pair
        record = container.verification_repository.insert(
            {
                "contact_id": contact.id,
                "mailing_list_id": newsletter.id,
                "token": "orphan-token",
                "expires_at": clock.now + timedelta(hours=1),
            }
        )

        with pytest.raises(SubscriptionNotFoundError) as exc_info:
            await container.verification.consume_token(record.token)

        assert exc_info.value.details == {"contact_id": contact.id, "mailing_list_id": newsletter.id}

    def test_concurrent_consumption_succeeds_once(self, container, contact, newsletter, pending, clock):
        record = container.verification_repository.insert(
            {
                "contact_id": contact.id,
                "mailing_list_id": newsletter.id,
                "token": "race-token",
                "expires_at": clock.now + timedelta(hours=1),
                "created_at": clock.now,
            }
        )
        service = container.verification

        def attempt():
            try:
                return asyncio.run(service.consume_token(record.token))
            except TokenAlreadyUsedError as e:
                return e

        with ThreadPoolExecutor(max_workers=2) as pool:
            outcomes = list(pool.map(lambda _: attempt(), range(2)))

        successes = [o for o in outcomes if not isinstance(o, Exception)]
        failures = [o for o in outcomes if isinstance(o, TokenAlreadyUsedError)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert successes[0].subscription.status == SubscriptionStatus.SUBSCRIBED


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_resubscribe_after_bounce_needs_fresh_token(self, container, contact, newsletter, clock):
        await container.subscriptions.subscribe(contact.id, newsletter.id, SubscribeOptions(auto_confirm=True))
        await container.subscriptions.suppress(contact.id, SuppressionReason.HARD_BOUNCE)

        await container.subscriptions.subscribe(contact.id, newsletter.id)
        token = await container.verification.issue_token(contact.id, newsletter.id)
        result = await container.verification.consume_token(token.token)

        assert result.subscription.status == SubscriptionStatus.SUBSCRIBED
        assert result.contact.is_verified is True

    @pytest.mark.asyncio
    async def test_link_from_before_bounce_cannot_confirm(self, container, database, contact, newsletter, pending):
        stale = await container.verification.issue_token(contact.id, newsletter.id)
        await container.subscriptions.suppress(contact.id, SuppressionReason.HARD_BOUNCE)
        await container.subscriptions.subscribe(contact.id, newsletter.id)

        with pytest.raises(TokenNotFoundError):
            await container.verification.consume_token(stale.token)

        subscription = await container.subscriptions.get_subscription(contact.id, newsletter.id)
        assert subscription.status == SubscriptionStatus.PENDING
        assert container.contact_repository.get_by_id(contact.id).is_verified is False
        rows = database.select("contact_verification_tokens", token=stale.token)
        assert rows[0]["used_at"] is None
        assert rows[0]["revoked_at"] is not None

    @pytest.mark.asyncio
    async def test_link_from_before_unsubscribe_cannot_confirm(self, container, contact, newsletter, pending, clock):
        stale = await container.verification.issue_token(contact.id, newsletter.id)
        await container.subscriptions.unsubscribe(contact.id, newsletter.id, "changed my mind")
        clock.advance(minutes=5)
        await container.subscriptions.subscribe(contact.id, newsletter.id)
        fresh = await container.verification.issue_token(contact.id, newsletter.id)

        with pytest.raises(TokenNotFoundError):
            await container.verification.consume_token(stale.token)
        result = await container.verification.consume_token(fresh.token)

        assert result.subscription.status == SubscriptionStatus.SUBSCRIBED
        assert "reason" not in result.subscription.metadata
