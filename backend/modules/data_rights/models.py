"""
Data rights models.

The export document is returned to the account holder as-is, so its
keys are camelCase like the rest of the public API.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.contacts.models import ContactKind, ContactSource
from modules.subscriptions.models import SubscriptionStatus


class _ExportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubscriptionExport(_ExportModel):
    """One subscription as exported."""

    list_name: str = Field(..., alias="list", description="Mailing list name")
    list_slug: str
    status: SubscriptionStatus
    opt_in_at: Optional[datetime] = None
    opt_out_at: Optional[datetime] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ContactExport(_ExportModel):
    """One contact with its subscriptions."""

    value: str
    kind: ContactKind
    is_verified: bool
    verified_at: Optional[datetime] = None
    source: ContactSource
    created_at: datetime
    subscriptions: list[SubscriptionExport] = Field(default_factory=list)


class ContactDataExport(_ExportModel):
    """Everything the subscription engine stores about an account."""

    account_id: str
    export_date: datetime
    contacts: list[ContactExport] = Field(default_factory=list)


class ContactDataDeletion(_ExportModel):
    """Result of an erasure request."""

    success: bool = True
    account_id: str
    contacts_deleted: int
