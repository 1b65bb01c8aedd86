"""Event publisher: turns domain events into topic-addressed messages.

Every command handler calls ``publish()`` after its write has been
persisted. The publisher does not roll anything back: a failure here
means the write succeeded but the audit trail will miss the event.

If the bus has not connected yet the publish is skipped with a warning,
so catalog writes keep working while the broker is unavailable at
startup. Once connected, send failures are re-raised as
EventPublishError.
"""

from __future__ import annotations

import json
import logging
import time

from catalog.application.message_bus import (
    CATEGORY_EVENTS_TOPIC,
    DEFAULT_EVENTS_TOPIC,
    PRODUCT_EVENTS_TOPIC,
    MessageBus,
)
from catalog.domain.events import DomainEvent, EventType, event_payload

logger = logging.getLogger(__name__)

TOPIC_ROUTES: dict[EventType, str] = {
    EventType.CATEGORY_CREATED: CATEGORY_EVENTS_TOPIC,
    EventType.CATEGORY_UPDATED: CATEGORY_EVENTS_TOPIC,
    EventType.PRODUCT_CREATED: PRODUCT_EVENTS_TOPIC,
    EventType.PRODUCT_ACTIVATED: PRODUCT_EVENTS_TOPIC,
    EventType.PRODUCT_ARCHIVED: PRODUCT_EVENTS_TOPIC,
    EventType.PRODUCT_DESCRIPTION_UPDATED: PRODUCT_EVENTS_TOPIC,
    EventType.CATEGORY_ADDED_TO_PRODUCT: PRODUCT_EVENTS_TOPIC,
    EventType.CATEGORY_REMOVED_FROM_PRODUCT: PRODUCT_EVENTS_TOPIC,
    EventType.ATTRIBUTE_ADDED_TO_PRODUCT: PRODUCT_EVENTS_TOPIC,
    EventType.ATTRIBUTE_UPDATED: PRODUCT_EVENTS_TOPIC,
    EventType.ATTRIBUTE_REMOVED_FROM_PRODUCT: PRODUCT_EVENTS_TOPIC,
}


class EventPublishError(Exception):
    """The write was persisted but its event could not be published."""

    def __init__(self, event: DomainEvent, cause: Exception) -> None:
        super().__init__(
            f"Failed to publish {event.event_type.value} for "
            f"{event.aggregate_id}: {cause}"
        )
        self.event = event


def topic_for(event_type: EventType) -> str:
    return TOPIC_ROUTES.get(event_type, DEFAULT_EVENTS_TOPIC)


def build_envelope(event: DomainEvent) -> dict:
    """Wrap *event* in the message envelope consumed by the audit side."""
    occurred_ms = int(event.occurred_at.timestamp() * 1000)
    return {
        "eventId": f"{event.aggregate_id}-{occurred_ms}",
        "eventType": event.event_type.value,
        "aggregateId": event.aggregate_id,
        "occurredAt": event.occurred_at.isoformat(),
        "data": event_payload(event),
    }


class EventPublisher:

    def __init__(self, bus: MessageBus) -> None:
        self._bus = bus

    def publish(self, event: DomainEvent) -> None:
        event_type = event.event_type.value

        if not self._bus.is_connected:
            logger.warning(
                "Message bus not connected, skipping publish of %s for %s",
                event_type,
                event.aggregate_id,
            )
            return

        topic = topic_for(event.event_type)
        headers = {
            "correlation-id": f"{event.aggregate_id}-{int(time.time() * 1000)}",
            "event-type": event_type,
        }

        try:
            self._bus.send(
                topic,
                key=event.aggregate_id,  # per-aggregate ordering
                value=json.dumps(build_envelope(event)),
                headers=headers,
            )
        except Exception as exc:
            logger.error(
                "Failed to publish event topic=%s event_type=%s aggregate_id=%s: %s",
                topic,
                event_type,
                event.aggregate_id,
                exc,
            )
            raise EventPublishError(event, exc) from exc

        logger.info(
            "Event published topic=%s event_type=%s aggregate_id=%s",
            topic,
            event_type,
            event.aggregate_id,
        )
