"""
Verification module.

Issues and consumes the single-use tokens of the double opt-in flow.

Public API:
- IVerificationService: Interface for token issue and consumption
- IVerificationMailer: Port for sending verification links
- VerificationToken: A stored token
- VerificationResult: Contact and subscription after verification
"""

from .interfaces import IVerificationService, IVerificationMailer, IVerificationTokenRepository
from .models import VerificationToken, VerificationResult, VerificationErrorResponse
from .exceptions import (
    MissingTokenError,
    TokenNotFoundError,
    TokenExpiredError,
    TokenAlreadyUsedError,
    VerificationRateLimitError,
)

__all__ = [
    # Interfaces
    "IVerificationService",
    "IVerificationMailer",
    "IVerificationTokenRepository",
    # Models
    "VerificationToken",
    "VerificationResult",
    "VerificationErrorResponse",
    # Exceptions
    "MissingTokenError",
    "TokenNotFoundError",
    "TokenExpiredError",
    "TokenAlreadyUsedError",
    "VerificationRateLimitError",
]
