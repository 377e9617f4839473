"""
Data rights module.

Export and erasure of everything stored about an account's contacts.

Public API:
- IDataRightsService: Interface for export and erasure
- ContactDataExport: The export document
"""

from .interfaces import IDataRightsService
from .models import ContactDataExport, ContactExport, SubscriptionExport, ContactDataDeletion
from .exceptions import NoContactDataError

__all__ = [
    # Interface
    "IDataRightsService",
    # Models
    "ContactDataExport",
    "ContactExport",
    "SubscriptionExport",
    "ContactDataDeletion",
    # Exceptions
    "NoContactDataError",
]
