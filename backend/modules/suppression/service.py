"""
Suppression handler.

Turns hard bounces and spam complaints into address-level suppression:
every subscription of the contact goes to ``bounced`` and the contact
loses its verified flag.
"""

import asyncio
import logging
from typing import Any

from modules.contacts.exceptions import ContactNotFoundError
from modules.contacts.models import ContactKind

from .classifier import classify, suppression_details
from .interfaces import ISuppressionService
from .models import DeliveryEvent, EventOutcome, EventResult, SuppressionBatchResult

logger = logging.getLogger(__name__)


class SuppressionService(ISuppressionService):
    """Processes delivery-provider feedback batches."""

    def __init__(
        self,
        contacts: Any,       # IContactService - injected
        subscriptions: Any,  # ISubscriptionService - injected
    ):
        self._contacts = contacts
        self._subscriptions = subscriptions

    async def process_events(self, events: list[DeliveryEvent]) -> SuppressionBatchResult:
        logger.info("Received %d delivery event(s)", len(events))

        # Fan out per recipient, keep input order within each recipient
        by_recipient: dict[str, list[tuple[int, DeliveryEvent]]] = {}
        for index, event in enumerate(events):
            by_recipient.setdefault(event.email.strip().lower(), []).append((index, event))

        batches = await asyncio.gather(
            *(self._process_recipient(items) for items in by_recipient.values())
        )
        results = sorted((result for batch in batches for result in batch), key=lambda r: r.index)

        summary = SuppressionBatchResult(
            processed=len(results),
            suppressed=sum(1 for r in results if r.outcome == EventOutcome.SUPPRESSED),
            ignored=sum(
                1 for r in results
                if r.outcome in (EventOutcome.IGNORED, EventOutcome.UNKNOWN_RECIPIENT)
            ),
            failed=sum(1 for r in results if r.outcome == EventOutcome.FAILED),
            results=results,
        )
        if summary.failed:
            logger.warning("%d of %d delivery event(s) failed", summary.failed, summary.processed)
        return summary

    async def _process_recipient(self, items: list[tuple[int, DeliveryEvent]]) -> list[EventResult]:
        return [await self._process_event(index, event) for index, event in items]

    async def _process_event(self, index: int, event: DeliveryEvent) -> EventResult:
        def result(outcome: EventOutcome, detail: str | None = None) -> EventResult:
            return EventResult(
                index=index,
                email=event.email,
                event=event.event,
                outcome=outcome,
                detail=detail,
            )

        reason = classify(event)
        if reason is None:
            logger.debug("Ignoring %s event (type=%s)", event.event, event.type)
            return result(EventOutcome.IGNORED)

        try:
            contact = await self._contacts.find_contact(ContactKind.EMAIL, event.email)
            if contact is None:
                logger.debug("Ignoring %s event for unknown recipient", event.event)
                return result(EventOutcome.UNKNOWN_RECIPIENT)

            await self._subscriptions.suppress(
                contact.id,
                reason,
                details=suppression_details(reason, event),
            )
        except ContactNotFoundError:
            # Erased between lookup and suppression
            return result(EventOutcome.UNKNOWN_RECIPIENT)
        except Exception as e:
            logger.exception("Failed to process %s event #%d", event.event, index)
            return result(EventOutcome.FAILED, str(e))

        return result(EventOutcome.SUPPRESSED, reason.value)
