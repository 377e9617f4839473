"""
Contacts module data models.

A contact is one communication address (email or phone) that may belong
to an account or, until linked, to nobody (a guest contact).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContactKind(str, Enum):
    """Type of communication address."""

    EMAIL = "email"
    PHONE = "phone"


class ContactSource(str, Enum):
    """Where a contact was first (or last) captured."""

    AUTH = "auth"                # Identity provider sign-up or sign-in
    SIGNUP_FORM = "signup_form"  # Public subscribe form
    ORDER = "order"              # Checkout
    MANUAL = "manual"            # Added by an operator
    IMPORT = "import"            # Bulk import


class Contact(BaseModel):
    """A stored contact row."""

    id: str
    kind: ContactKind
    value: str = Field(..., description="Normalized address (lowercased email or E.164 phone)")
    owner_account_id: Optional[str] = None
    is_primary: bool = False
    is_verified: bool = False
    verified_at: Optional[datetime] = None
    source: ContactSource
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @property
    def is_guest(self) -> bool:
        """True while no account owns this contact."""
        return self.owner_account_id is None


class CreateContactRequest(BaseModel):
    """Request to create (or upsert) a contact."""

    kind: ContactKind = ContactKind.EMAIL
    value: str = Field(..., min_length=1, max_length=320)
    source: ContactSource = ContactSource.MANUAL
    owner_account_id: Optional[str] = None
    is_primary: bool = False
    is_verified: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)


class LinkContactRequest(BaseModel):
    """
    Attach an email address to a signed-in account.

    Sent when the identity provider reports an account; the provider has
    already proven ownership of the address when ``email_verified`` is set.
    """

    account_id: str
    email: str
    email_verified: bool = False
    newsletter_opt_in: bool = False


class LinkContactBody(BaseModel):
    """Body of ``POST /api/contacts/link``; identity comes from the JWT."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    newsletter_opt_in: bool = False
