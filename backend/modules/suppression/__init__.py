"""
Suppression module.

Consumes delivery-provider feedback and suppresses addresses that hard
bounced or complained.

Public API:
- ISuppressionService: Interface for batch processing
- DeliveryEvent: One provider event
- SuppressionBatchResult: Per-batch summary
"""

from .interfaces import ISuppressionService
from .models import DeliveryEvent, EventOutcome, EventResult, SuppressionBatchResult
from .classifier import classify, is_soft_bounce, suppression_details

__all__ = [
    # Interface
    "ISuppressionService",
    # Models
    "DeliveryEvent",
    "EventOutcome",
    "EventResult",
    "SuppressionBatchResult",
    # Classification
    "classify",
    "is_soft_bounce",
    "suppression_details",
]
