"""Audit log consumer.

Listens to the catalog event topics and writes one AuditRecord per
message. Processing is best effort: a message that cannot be parsed or
saved is logged and skipped, never re-raised, because a consumer that
stops on one bad message would block every audit entry behind it.

Delivery is at-least-once, so the same event can be recorded twice.
Records are not deduplicated.
"""

from __future__ import annotations

import json
import logging

from catalog.application.message_bus import (
    CATEGORY_EVENTS_TOPIC,
    PRODUCT_EVENTS_TOPIC,
    BusMessage,
    MessageBus,
)
from catalog.domain.model.audit_record import AuditRecord
from catalog.domain.repository.audit_log_repository import AuditLogRepository

logger = logging.getLogger(__name__)

AUDITED_TOPICS = [PRODUCT_EVENTS_TOPIC, CATEGORY_EVENTS_TOPIC]


class AuditLogConsumer:

    def __init__(
        self,
        audit_repo: AuditLogRepository,
        bus: MessageBus,
        topics: list[str] | None = None,
    ) -> None:
        self._audit_repo = audit_repo
        self._bus = bus
        self._topics = list(topics or AUDITED_TOPICS)

    # --- Lifecycle ------------------------------------------------------------

    def start(self) -> None:
        """Connect, subscribe to new messages only, and block in the run loop."""
        if not self._bus.is_connected:
            self._bus.connect()
        logger.info("Audit consumer connected")

        self._bus.subscribe(self._topics, from_beginning=False)
        logger.info("Audit consumer listening on %s", ", ".join(self._topics))

        self._bus.run(self.handle_message)

    def stop(self) -> None:
        self._bus.stop()
        self._bus.disconnect()
        logger.info("Audit consumer disconnected")

    # --- Message handling -----------------------------------------------------

    def handle_message(self, topic: str, partition: int, message: BusMessage) -> None:
        if not message.value:
            logger.warning(
                "Received message without value topic=%s partition=%d", topic, partition
            )
            return

        try:
            envelope = json.loads(message.value)
            event_type = envelope["eventType"]
            aggregate_id = envelope["aggregateId"]

            logger.debug(
                "Processing audit event topic=%s event_type=%s aggregate_id=%s",
                topic,
                event_type,
                aggregate_id,
            )

            record = AuditRecord.from_event(
                event_type=event_type,
                entity_id=aggregate_id,
                payload=envelope.get("data") or {},
            )
            self._audit_repo.append(record)

            logger.info(
                "Audit log saved event_type=%s aggregate_id=%s entity_type=%s",
                event_type,
                aggregate_id,
                record.entity_type.value,
            )
        except Exception:
            # Never re-raise: the run loop must keep going
            logger.exception(
                "Failed to process message for audit topic=%s partition=%d offset=%s value=%r",
                topic,
                partition,
                message.offset,
                message.value,
            )
