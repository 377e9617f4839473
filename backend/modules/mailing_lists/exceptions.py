"""
Mailing lists module exceptions.
"""

from shared.exceptions import ValidationError, NotFoundError, ConflictError


class MailingListNotFoundError(NotFoundError):
    """Raised when a mailing list is not found."""

    def __init__(self, identifier: str):
        super().__init__(
            f"Mailing list not found: {identifier}",
            code="MAILING_LIST_NOT_FOUND",
            details={"mailing_list": identifier},
        )


class DuplicateMailingListError(ConflictError):
    """Raised when the slug is already taken."""

    def __init__(self, slug: str):
        super().__init__(
            f"Mailing list already exists: {slug}",
            code="DUPLICATE_MAILING_LIST",
            details={"slug": slug},
        )


class InvalidSlugError(ValidationError):
    """Raised when a slug is not lowercase words joined by hyphens."""

    def __init__(self, slug: str):
        super().__init__(
            f"Invalid mailing list slug: {slug!r}",
            code="INVALID_SLUG",
            details={"slug": slug},
        )


class MailingListInactiveError(ValidationError):
    """Raised when subscribing to a list that is switched off."""

    def __init__(self, slug: str):
        super().__init__(
            f"Mailing list is not active: {slug}",
            code="MAILING_LIST_INACTIVE",
            details={"slug": slug},
        )
