"""
Mailing list API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_mailing_list_service

from .interfaces import IMailingListService
from .models import MailingList

router = APIRouter()


@router.get("", response_model=list[MailingList])
async def list_mailing_lists(
    service: IMailingListService = Depends(get_mailing_list_service),
) -> list[MailingList]:
    """
    List the active mailing lists a signup form can offer.
    """
    return await service.list_lists(include_inactive=False)
