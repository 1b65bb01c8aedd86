"""Composition root -- wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from catalog.application.event_publisher import EventPublisher
from catalog.application.message_bus import MessageBus
from catalog.infrastructure.config import get_settings
from catalog.infrastructure.messaging.bus_factory import create_message_bus
from catalog.infrastructure.persistence.json_audit_log_repository import (
    JsonAuditLogRepository,
)
from catalog.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

logger = logging.getLogger(__name__)


def category_repository() -> JsonCategoryRepository:
    return JsonCategoryRepository(get_settings().categories_file)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().products_file)


def audit_log_repository() -> JsonAuditLogRepository:
    return JsonAuditLogRepository(get_settings().audit_log_file)


def message_bus() -> MessageBus:
    return create_message_bus(get_settings())


@lru_cache
def event_publisher() -> EventPublisher:
    """Publisher over a bus connected on a best-effort basis.

    A broker that is down at startup must not block catalog writes: the
    connection error is logged and the publisher stays in its
    not-connected, skip-with-warning mode.
    """
    bus = message_bus()
    try:
        bus.connect()
    except Exception as exc:
        logger.warning("Message bus unavailable, events will not be published: %s", exc)
    return EventPublisher(bus)
