"""Domain events.

Each event type is its own frozen dataclass; ``DomainEvent`` is the
union of all of them, discriminated by ``event_type``. Code that needs
to treat every variant (topic routing, audit classification) keys off
``EventType`` so a new member cannot be silently forgotten.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from catalog.domain.model.value_objects import AttributeValue


class EventType(Enum):
    CATEGORY_CREATED = "CATEGORY_CREATED"
    CATEGORY_UPDATED = "CATEGORY_UPDATED"
    PRODUCT_CREATED = "PRODUCT_CREATED"
    PRODUCT_ACTIVATED = "PRODUCT_ACTIVATED"
    PRODUCT_ARCHIVED = "PRODUCT_ARCHIVED"
    PRODUCT_DESCRIPTION_UPDATED = "PRODUCT_DESCRIPTION_UPDATED"
    CATEGORY_ADDED_TO_PRODUCT = "CATEGORY_ADDED_TO_PRODUCT"
    CATEGORY_REMOVED_FROM_PRODUCT = "CATEGORY_REMOVED_FROM_PRODUCT"
    ATTRIBUTE_ADDED_TO_PRODUCT = "ATTRIBUTE_ADDED_TO_PRODUCT"
    ATTRIBUTE_UPDATED = "ATTRIBUTE_UPDATED"
    ATTRIBUTE_REMOVED_FROM_PRODUCT = "ATTRIBUTE_REMOVED_FROM_PRODUCT"


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Category events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryCreated:
    category_id: str
    name: str
    parent_id: str | None = None
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.CATEGORY_CREATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.category_id


@dataclass(frozen=True)
class CategoryUpdated:
    category_id: str
    name: str
    parent_id: str | None = None
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.CATEGORY_UPDATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.category_id


# ---------------------------------------------------------------------------
# Product events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProductCreated:
    product_id: str
    name: str
    description: str | None = None
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.PRODUCT_CREATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class ProductActivated:
    product_id: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.PRODUCT_ACTIVATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class ProductArchived:
    product_id: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.PRODUCT_ARCHIVED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class ProductDescriptionUpdated:
    product_id: str
    description: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.PRODUCT_DESCRIPTION_UPDATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class CategoryAddedToProduct:
    product_id: str
    category_id: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.CATEGORY_ADDED_TO_PRODUCT, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class CategoryRemovedFromProduct:
    product_id: str
    category_id: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.CATEGORY_REMOVED_FROM_PRODUCT, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class AttributeAddedToProduct:
    product_id: str
    key: str
    value: AttributeValue
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.ATTRIBUTE_ADDED_TO_PRODUCT, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class AttributeUpdated:
    product_id: str
    key: str
    value: AttributeValue
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.ATTRIBUTE_UPDATED, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


@dataclass(frozen=True)
class AttributeRemovedFromProduct:
    product_id: str
    key: str
    occurred_at: datetime = field(default_factory=_now)
    event_type: EventType = field(default=EventType.ATTRIBUTE_REMOVED_FROM_PRODUCT, init=False)

    @property
    def aggregate_id(self) -> str:
        return self.product_id


DomainEvent = Union[
    CategoryCreated,
    CategoryUpdated,
    ProductCreated,
    ProductActivated,
    ProductArchived,
    ProductDescriptionUpdated,
    CategoryAddedToProduct,
    CategoryRemovedFromProduct,
    AttributeAddedToProduct,
    AttributeUpdated,
    AttributeRemovedFromProduct,
]


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def event_payload(event: DomainEvent) -> dict[str, Any]:
    """Render *event* as the camelCase ``data`` object of the wire envelope."""
    payload: dict[str, Any] = {}
    for f in fields(event):
        value = getattr(event, f.name)
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, datetime):
            value = value.isoformat()
        payload[_camel(f.name)] = value
    return payload
