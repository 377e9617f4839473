"""
Claims carried by the identity provider's access token.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Decoded Supabase access token."""

    sub: str  # Account ID
    email: str
    email_confirmed_at: Optional[str] = None
    aud: str
    exp: int
    iat: int
    role: Optional[str] = None

    @property
    def email_verified(self) -> bool:
        return self.email_confirmed_at is not None

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)
