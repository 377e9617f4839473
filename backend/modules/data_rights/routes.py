"""
Data rights API endpoints.

Both act on the signed-in account only.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_data_rights_service
from shared.models import AuthenticatedUser

from .interfaces import IDataRightsService
from .models import ContactDataDeletion, ContactDataExport

router = APIRouter()


@router.get("/export", response_model=ContactDataExport)
async def export_contact_data(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDataRightsService = Depends(get_data_rights_service),
) -> ContactDataExport:
    """
    Download every contact and subscription stored for the account.
    """
    return await service.export_contact_data(user.id)


@router.delete("", response_model=ContactDataDeletion)
async def delete_contact_data(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDataRightsService = Depends(get_data_rights_service),
) -> ContactDataDeletion:
    """
    Permanently erase the account's contacts, subscriptions and tokens.

    Returns 404 if the account has no contacts.
    """
    return await service.delete_contact_data(user.id)
