"""
Mailing list data models.
"""

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
SLUG_REGEX = re.compile(SLUG_PATTERN)


class MailingList(BaseModel):
    """A named audience contacts subscribe to."""

    id: str
    slug: str
    name: str
    description: Optional[str] = None
    is_default: bool = Field(
        default=False,
        description="Every newly linked account is auto-subscribed",
    )
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class CreateMailingListRequest(BaseModel):
    """Request to create a mailing list."""

    slug: str = Field(..., min_length=1, max_length=64, pattern=SLUG_PATTERN)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    is_default: bool = False
    is_active: bool = True


DEFAULT_MAILING_LISTS: list[CreateMailingListRequest] = [
    CreateMailingListRequest(
        slug="newsletter",
        name="Newsletter",
        description="Monthly updates about new products and company news",
    ),
    CreateMailingListRequest(
        slug="product-alerts",
        name="Product Alerts",
        description="Get notified when new products launch or restock",
    ),
    CreateMailingListRequest(
        slug="order-updates",
        name="Order Updates",
        description="Transactional emails about your orders (required)",
        is_default=True,
    ),
    CreateMailingListRequest(
        slug="sms-alerts",
        name="SMS Alerts",
        description="Urgent notifications via text message",
        is_active=False,
    ),
]


def name_from_slug(slug: str) -> str:
    """Human-readable list name for a lazily created list."""
    return " ".join(part.capitalize() for part in slug.split("-"))
