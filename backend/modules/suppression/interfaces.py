"""
Suppression module interface.
"""

from typing import Protocol, runtime_checkable

from .models import DeliveryEvent, SuppressionBatchResult


@runtime_checkable
class ISuppressionService(Protocol):
    """
    Interface for the suppression handler.
    """

    async def process_events(self, events: list[DeliveryEvent]) -> SuppressionBatchResult:
        """
        Apply a batch of delivery-feedback events.

        Events for different recipients are processed concurrently; events
        for the same recipient are applied in the order received. A failure
        in one event is logged and reported without stopping the others.
        Events for unknown recipients are no-ops.
        """
        ...
