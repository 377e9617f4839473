"""
Data rights module exceptions.
"""

from shared.exceptions import NotFoundError


class NoContactDataError(NotFoundError):
    """Raised when an account has no contacts to erase."""

    def __init__(self, account_id: str):
        super().__init__(
            "No contact data found for this account",
            code="NO_CONTACT_DATA",
            details={"account_id": account_id},
        )
