"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories are Supabase-backed unless ``STORAGE_BACKEND=memory`` (or an
InMemoryDatabase is passed in), in which case every module shares one
in-memory database.
"""

from typing import TYPE_CHECKING, Optional

from shared.clock import Clock, utc_now
from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.memory import InMemoryDatabase
    from modules.contacts.interfaces import IContactService, IContactRepository
    from modules.mailing_lists.interfaces import IMailingListService, IMailingListRepository
    from modules.subscriptions.interfaces import ISubscriptionService, ISubscriptionRepository
    from modules.subscriptions.signup import SignupService
    from modules.verification.interfaces import (
        IVerificationService,
        IVerificationMailer,
        IVerificationTokenRepository,
    )
    from modules.suppression.interfaces import ISuppressionService
    from modules.data_rights.interfaces import IDataRightsService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        database: "InMemoryDatabase | None" = None,
        clock: Optional[Clock] = None,
        mailer: "IVerificationMailer | None" = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._database = database
        self._clock = clock or utc_now
        self._mailer = mailer
        self._clear()

    def _clear(self) -> None:
        self._contact_repository: "IContactRepository | None" = None
        self._mailing_list_repository: "IMailingListRepository | None" = None
        self._subscription_repository: "ISubscriptionRepository | None" = None
        self._verification_repository: "IVerificationTokenRepository | None" = None
        self._contact_service: "IContactService | None" = None
        self._mailing_list_service: "IMailingListService | None" = None
        self._subscription_service: "ISubscriptionService | None" = None
        self._verification_service: "IVerificationService | None" = None
        self._signup_service: "SignupService | None" = None
        self._suppression_service: "ISuppressionService | None" = None
        self._data_rights_service: "IDataRightsService | None" = None

    @property
    def uses_memory(self) -> bool:
        return self._database is not None or self._settings.storage_backend == "memory"

    def _memory(self) -> "InMemoryDatabase":
        if self._database is None:
            from shared.database import get_memory_database
            self._database = get_memory_database()
        return self._database

    def _supabase(self):
        from shared.database import get_supabase_client
        return get_supabase_client()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def contact_repository(self) -> "IContactRepository":
        """Get the contact repository instance."""
        if self._contact_repository is None:
            from modules.contacts.repository import ContactRepository, InMemoryContactRepository
            self._contact_repository = (
                InMemoryContactRepository(self._memory())
                if self.uses_memory
                else ContactRepository(self._supabase())
            )
        return self._contact_repository

    @property
    def mailing_list_repository(self) -> "IMailingListRepository":
        """Get the mailing list repository instance."""
        if self._mailing_list_repository is None:
            from modules.mailing_lists.repository import (
                MailingListRepository,
                InMemoryMailingListRepository,
            )
            self._mailing_list_repository = (
                InMemoryMailingListRepository(self._memory())
                if self.uses_memory
                else MailingListRepository(self._supabase())
            )
        return self._mailing_list_repository

    @property
    def subscription_repository(self) -> "ISubscriptionRepository":
        """Get the subscription repository instance."""
        if self._subscription_repository is None:
            from modules.subscriptions.repository import (
                SubscriptionRepository,
                InMemorySubscriptionRepository,
            )
            self._subscription_repository = (
                InMemorySubscriptionRepository(self._memory())
                if self.uses_memory
                else SubscriptionRepository(self._supabase())
            )
        return self._subscription_repository

    @property
    def verification_repository(self) -> "IVerificationTokenRepository":
        """Get the verification token repository instance."""
        if self._verification_repository is None:
            from modules.verification.repository import (
                VerificationTokenRepository,
                InMemoryVerificationTokenRepository,
            )
            self._verification_repository = (
                InMemoryVerificationTokenRepository(self._memory())
                if self.uses_memory
                else VerificationTokenRepository(self._supabase())
            )
        return self._verification_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def mailing_lists(self) -> "IMailingListService":
        """Get the mailing list service instance."""
        if self._mailing_list_service is None:
            from modules.mailing_lists.service import MailingListService
            self._mailing_list_service = MailingListService(self.mailing_list_repository)
        return self._mailing_list_service

    @property
    def subscriptions(self) -> "ISubscriptionService":
        """Get the subscription service instance."""
        if self._subscription_service is None:
            from modules.subscriptions.service import SubscriptionService
            self._subscription_service = SubscriptionService(
                repository=self.subscription_repository,
                contacts=self.contact_repository,
                mailing_lists=self.mailing_lists,
                clock=self._clock,
            )
        return self._subscription_service

    @property
    def contacts(self) -> "IContactService":
        """Get the contact service instance."""
        if self._contact_service is None:
            from modules.contacts.service import ContactService
            self._contact_service = ContactService(
                repository=self.contact_repository,
                mailing_lists=self.mailing_lists,
                subscriptions=self.subscriptions,
                newsletter_slug=self._settings.newsletter_list_slug,
                clock=self._clock,
            )
        return self._contact_service

    @property
    def verification(self) -> "IVerificationService":
        """Get the verification service instance."""
        if self._verification_service is None:
            from modules.verification.service import VerificationService
            settings = self._settings
            self._verification_service = VerificationService(
                repository=self.verification_repository,
                clock=self._clock,
                token_ttl_hours=settings.verification_token_ttl_hours,
                token_bytes=settings.verification_token_bytes,
                rate_limit=settings.verification_rate_limit,
                rate_window_seconds=settings.verification_rate_window_seconds,
                public_base_url=settings.public_base_url,
            )
        return self._verification_service

    @property
    def mailer(self) -> "IVerificationMailer":
        """Get the verification mailer instance."""
        if self._mailer is None:
            from modules.verification.mailer import LoggingVerificationMailer
            self._mailer = LoggingVerificationMailer()
        return self._mailer

    @property
    def signup(self) -> "SignupService":
        """Get the signup service instance."""
        if self._signup_service is None:
            from modules.subscriptions.signup import SignupService
            self._signup_service = SignupService(
                contacts=self.contacts,
                mailing_lists=self.mailing_lists,
                subscriptions=self.subscriptions,
                verification=self.verification,
                mailer=self.mailer,
            )
        return self._signup_service

    @property
    def suppression(self) -> "ISuppressionService":
        """Get the suppression service instance."""
        if self._suppression_service is None:
            from modules.suppression.service import SuppressionService
            self._suppression_service = SuppressionService(
                contacts=self.contacts,
                subscriptions=self.subscriptions,
            )
        return self._suppression_service

    @property
    def data_rights(self) -> "IDataRightsService":
        """Get the data rights service instance."""
        if self._data_rights_service is None:
            from modules.data_rights.service import DataRightsService
            self._data_rights_service = DataRightsService(
                contacts=self.contacts,
                subscriptions=self.subscriptions,
                mailing_lists=self.mailing_lists,
                clock=self._clock,
            )
        return self._data_rights_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._clear()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a preconfigured container (tests, scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_contact_service() -> "IContactService":
    """FastAPI dependency for contact service."""
    return get_container().contacts


def get_mailing_list_service() -> "IMailingListService":
    """FastAPI dependency for mailing list service."""
    return get_container().mailing_lists


def get_subscription_service() -> "ISubscriptionService":
    """FastAPI dependency for subscription service."""
    return get_container().subscriptions


def get_verification_service() -> "IVerificationService":
    """FastAPI dependency for verification service."""
    return get_container().verification


def get_signup_service() -> "SignupService":
    """FastAPI dependency for the signup flow."""
    return get_container().signup


def get_suppression_service() -> "ISuppressionService":
    """FastAPI dependency for suppression service."""
    return get_container().suppression


def get_data_rights_service() -> "IDataRightsService":
    """FastAPI dependency for data rights service."""
    return get_container().data_rights
