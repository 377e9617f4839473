"""
Delivery-provider webhook endpoint.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_suppression_service

from .interfaces import ISuppressionService
from .models import DeliveryEvent, SuppressionBatchResult

router = APIRouter()


@router.post("/webhooks/delivery", response_model=SuppressionBatchResult)
async def delivery_webhook(
    events: list[DeliveryEvent],
    service: ISuppressionService = Depends(get_suppression_service),
) -> SuppressionBatchResult:
    """
    Receive bounce and spam-complaint events from the mail provider.

    Always answers 200 once the payload parses, whether or not any
    recipient matched, so the provider does not retry the batch.
    """
    return await service.process_events(events)
