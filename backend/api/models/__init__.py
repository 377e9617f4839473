"""Request and response models owned by the API layer."""

from .errors import ErrorResponse
from .token import TokenPayload

__all__ = [
    "ErrorResponse",
    "TokenPayload",
]
