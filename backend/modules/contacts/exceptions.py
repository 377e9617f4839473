"""
Contacts module exceptions.
"""

from shared.exceptions import (
    ListkeeperError,
    ValidationError,
    NotFoundError,
    ConflictError,
    ConstraintError,
)


class ContactError(ListkeeperError):
    """Base exception for contact-related errors."""

    pass


class InvalidContactError(ValidationError):
    """Raised when contact input is malformed."""

    def __init__(self, errors: list[str]):
        super().__init__(
            f"Invalid contact: {'; '.join(errors)}",
            code="INVALID_CONTACT",
            details={"errors": errors},
        )


class ContactNotFoundError(NotFoundError):
    """Raised when a contact is not found."""

    def __init__(self, contact_id: str):
        super().__init__(
            f"Contact not found: {contact_id}",
            code="CONTACT_NOT_FOUND",
            details={"contact_id": contact_id},
        )


class DuplicateContactError(ConflictError):
    """Raised when a (kind, value) pair is already stored."""

    def __init__(self, kind: str, value: str):
        super().__init__(
            f"Contact already exists: {kind} {value}",
            code="DUPLICATE_CONTACT",
            details={"kind": kind, "value": value},
        )


class PrimaryContactConflictError(ConstraintError):
    """Raised when an account would get a second primary contact of one kind."""

    def __init__(self, owner_account_id: str, kind: str):
        super().__init__(
            f"Account already has a primary {kind} contact",
            code="PRIMARY_CONTACT_CONFLICT",
            details={"owner_account_id": owner_account_id, "kind": kind},
        )


class ContactOwnershipConflictError(ConflictError):
    """Raised when linking a contact that another account already owns."""

    def __init__(self, contact_id: str, account_id: str):
        super().__init__(
            "Contact is linked to a different account",
            code="CONTACT_OWNERSHIP_CONFLICT",
            details={"contact_id": contact_id, "account_id": account_id},
        )
