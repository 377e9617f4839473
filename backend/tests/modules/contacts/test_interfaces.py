"""Tests for contacts module interfaces."""

from modules.contacts.interfaces import IContactRepository, IContactService
from modules.contacts.repository import ContactRepository, InMemoryContactRepository
from modules.contacts.service import ContactService
from unittest.mock import MagicMock


class TestIContactService:
    def test_service_implements_interface(self, container):
        service = ContactService(repository=container.contact_repository)
        assert isinstance(service, IContactService)


class TestIContactRepository:
    def test_supabase_repository_implements_interface(self):
        assert isinstance(ContactRepository(MagicMock()), IContactRepository)

    def test_memory_repository_implements_interface(self, database):
        assert isinstance(InMemoryContactRepository(database), IContactRepository)
