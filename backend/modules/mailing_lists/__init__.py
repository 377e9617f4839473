"""
Mailing lists module.

Registry of named, sluggable lists with default and active flags.

Public API:
- IMailingListService: Interface for the list registry
- MailingList: A stored list
- CreateMailingListRequest: Request to create a list
"""

from .interfaces import IMailingListService, IMailingListRepository
from .models import (
    MailingList,
    CreateMailingListRequest,
    DEFAULT_MAILING_LISTS,
    SLUG_PATTERN,
    name_from_slug,
)
from .exceptions import (
    MailingListNotFoundError,
    DuplicateMailingListError,
    InvalidSlugError,
    MailingListInactiveError,
)

__all__ = [
    # Interfaces
    "IMailingListService",
    "IMailingListRepository",
    # Models
    "MailingList",
    "CreateMailingListRequest",
    "DEFAULT_MAILING_LISTS",
    "SLUG_PATTERN",
    "name_from_slug",
    # Exceptions
    "MailingListNotFoundError",
    "DuplicateMailingListError",
    "InvalidSlugError",
    "MailingListInactiveError",
]
