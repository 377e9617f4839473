"""
Account identity passed from the auth middleware to route handlers.

Only infrastructure models live here; contact and subscription models
belong to their modules.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr


class AuthenticatedUser(BaseModel):
    """
    The signed-in account a request acts for.

    ``id`` is the identity provider's account id and is what contacts
    store as ``owner_account_id``. ``email_verified`` means the provider
    has already proven the address, so linking it sends no verification
    email.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    email: EmailStr
    email_verified: bool = False
    last_sign_in: Optional[datetime] = None
