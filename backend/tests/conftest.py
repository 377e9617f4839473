"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
a controllable clock, an in-memory database, a service container wired to
it, and JWTs signed with a test secret.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from shared.config import Settings
from shared.memory import InMemoryDatabase
from modules.contacts.models import Contact, ContactKind, ContactSource
from modules.mailing_lists.models import DEFAULT_MAILING_LISTS, MailingList
from modules.verification.mailer import LoggingVerificationMailer


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

START_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database(clock: FakeClock) -> InMemoryDatabase:
    """Fresh in-memory database per test."""
    return InMemoryDatabase(clock=clock)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        storage_backend="memory",
        supabase_jwt_secret=TEST_JWT_SECRET,
        public_base_url="https://api.example.com",
        frontend_url="https://shop.example.com",
        confirmation_path="/subscription-confirmed",
    )


@pytest.fixture
def mailer() -> LoggingVerificationMailer:
    return LoggingVerificationMailer()


@pytest.fixture
def container(
    test_settings: Settings,
    database: InMemoryDatabase,
    clock: FakeClock,
    mailer: LoggingVerificationMailer,
) -> ServiceContainer:
    """Service container over the in-memory database."""
    return ServiceContainer(
        settings=test_settings,
        database=database,
        clock=clock,
        mailer=mailer,
    )


@pytest.fixture
def client(container: ServiceContainer, test_settings: Settings, monkeypatch) -> TestClient:
    """API client whose routes resolve services from ``container``."""
    monkeypatch.setattr("api.middleware.auth.get_settings", lambda: test_settings)
    monkeypatch.setattr("modules.verification.routes.get_settings", lambda: test_settings)
    set_container(container)
    yield TestClient(create_app())
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def mailing_lists(container: ServiceContainer) -> dict[str, MailingList]:
    """The standard lists, stored and keyed by slug."""
    repository = container.mailing_list_repository
    return {
        request.slug: repository.insert(request.model_dump())
        for request in DEFAULT_MAILING_LISTS
    }


@pytest.fixture
def make_auth_headers():
    """Factory for authorization headers of arbitrary test accounts."""

    def _make(user_id: str = "test-user-123", email: str = "test@example.com", **kwargs) -> dict[str, str]:
        token = create_test_token(user_id=user_id, email=email, **kwargs)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def contact(container: ServiceContainer) -> Contact:
    """A guest email contact captured by the signup form."""
    return container.contact_repository.insert(
        {
            "kind": ContactKind.EMAIL,
            "value": "jane@example.com",
            "source": ContactSource.SIGNUP_FORM,
            "metadata": {},
        }
    )
