"""
Contacts module.

The contact store: one row per (kind, normalized value), optionally
owned by an account.

Public API:
- IContactService: Interface for contact operations
- Contact: A stored contact
- CreateContactRequest: Request to create or upsert a contact
- LinkContactRequest: Request to attach an email to an account
"""

from .interfaces import IContactService, IContactRepository
from .models import (
    Contact,
    ContactKind,
    ContactSource,
    CreateContactRequest,
    LinkContactRequest,
    LinkContactBody,
)
from .exceptions import (
    ContactError,
    InvalidContactError,
    ContactNotFoundError,
    DuplicateContactError,
    PrimaryContactConflictError,
    ContactOwnershipConflictError,
)
from .validation import (
    validate_email,
    validate_phone,
    normalize_contact,
    validate_contact_input,
)

__all__ = [
    # Interfaces
    "IContactService",
    "IContactRepository",
    # Models
    "Contact",
    "ContactKind",
    "ContactSource",
    "CreateContactRequest",
    "LinkContactRequest",
    "LinkContactBody",
    # Exceptions
    "ContactError",
    "InvalidContactError",
    "ContactNotFoundError",
    "DuplicateContactError",
    "PrimaryContactConflictError",
    "ContactOwnershipConflictError",
    # Validation
    "validate_email",
    "validate_phone",
    "normalize_contact",
    "validate_contact_input",
]
