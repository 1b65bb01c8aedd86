"""Audit record -- the materialized form of a consumed domain event.

Owned by the audit side, never by the write model. Records are
append-only: once written they are never mutated.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EntityType(Enum):
    PRODUCT = "Product"
    CATEGORY = "Category"
    UNKNOWN = "Unknown"


# Order matters: the product-scoped CATEGORY_* prefixes must be tested
# before the bare CATEGORY prefix.
_PREFIXES: tuple[tuple[str, EntityType], ...] = (
    ("PRODUCT", EntityType.PRODUCT),
    ("ATTRIBUTE", EntityType.PRODUCT),
    ("CATEGORY_ADDED", EntityType.PRODUCT),
    ("CATEGORY_REMOVED", EntityType.PRODUCT),
    ("CATEGORY", EntityType.CATEGORY),
)


def entity_type_for(event_type: str | None) -> EntityType:
    """Classify an event type string by its prefix."""
    for prefix, entity_type in _PREFIXES:
        if event_type and event_type.startswith(prefix):
            return entity_type
    return EntityType.UNKNOWN


@dataclass(frozen=True)
class AuditRecord:
    id: str
    entity_type: EntityType
    entity_id: str
    event_type: str
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def from_event(event_type: str, entity_id: str, payload: dict[str, Any]) -> AuditRecord:
        return AuditRecord(
            id=str(uuid.uuid4()),
            entity_type=entity_type_for(event_type),
            entity_id=entity_id,
            event_type=event_type,
            payload=payload,
        )
