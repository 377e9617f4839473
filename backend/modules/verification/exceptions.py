"""
Verification module exceptions.

Each token failure carries a distinct code so the UI can offer "resend"
for expired and invalid tokens but not for one that was already used.
"""

from shared.exceptions import NotFoundError, ValidationError, RateLimitError


class MissingTokenError(ValidationError):
    """Raised when no token was supplied."""

    def __init__(self):
        super().__init__("Verification token is required", code="MISSING_TOKEN")


class TokenNotFoundError(NotFoundError):
    """Raised when no token has this value."""

    def __init__(self):
        super().__init__("Invalid token", code="INVALID_TOKEN")


class TokenExpiredError(ValidationError):
    """Raised when the token's expiry time has passed."""

    def __init__(self):
        super().__init__("Token expired", code="EXPIRED_TOKEN")


class TokenAlreadyUsedError(ValidationError):
    """Raised when the token was consumed before."""

    def __init__(self):
        super().__init__("Token already used", code="TOKEN_ALREADY_USED")


class VerificationRateLimitError(RateLimitError):
    """Raised when a contact requested too many tokens in the window."""

    def __init__(self, contact_id: str, limit: int, window_seconds: int):
        super().__init__(
            "Too many verification requests. Please try again later.",
            code="VERIFICATION_RATE_LIMITED",
            details={
                "contact_id": contact_id,
                "limit": limit,
                "window_seconds": window_seconds,
            },
        )
