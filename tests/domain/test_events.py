"""Unit tests for domain events and audit classification."""

import dataclasses
from datetime import datetime, timezone

import pytest

from catalog.domain.events import (
    AttributeAddedToProduct,
    CategoryCreated,
    EventType,
    ProductActivated,
    event_payload,
)
from catalog.domain.model.audit_record import EntityType, entity_type_for


class TestDomainEvents:

    def test_aggregate_id_and_type(self):
        event = ProductActivated(product_id="p1")
        assert event.aggregate_id == "p1"
        assert event.event_type == EventType.PRODUCT_ACTIVATED
        assert event.occurred_at.tzinfo is not None

    def test_events_are_immutable(self):
        event = CategoryCreated(category_id="c1", name="Books")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.name = "Other"  # type: ignore[misc]

    def test_payload_is_camel_case(self):
        at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        event = AttributeAddedToProduct(product_id="p1", key="color", value="red", occurred_at=at)
        assert event_payload(event) == {
            "productId": "p1",
            "key": "color",
            "value": "red",
            "occurredAt": "2026-01-02T03:04:05+00:00",
            "eventType": "ATTRIBUTE_ADDED_TO_PRODUCT",
        }


class TestEntityClassification:

    @pytest.mark.parametrize(
        "event_type, expected",
        [
            ("PRODUCT_CREATED", EntityType.PRODUCT),
            ("PRODUCT_DESCRIPTION_UPDATED", EntityType.PRODUCT),
            ("ATTRIBUTE_UPDATED", EntityType.PRODUCT),
            ("CATEGORY_ADDED_TO_PRODUCT", EntityType.PRODUCT),
            ("CATEGORY_REMOVED_FROM_PRODUCT", EntityType.PRODUCT),
            ("CATEGORY_CREATED", EntityType.CATEGORY),
            ("CATEGORY_UPDATED", EntityType.CATEGORY),
            ("ORDER_PLACED", EntityType.UNKNOWN),
            ("", EntityType.UNKNOWN),
            (None, EntityType.UNKNOWN),
        ],
    )
    def test_prefix_mapping(self, event_type, expected):
        assert entity_type_for(event_type) == expected

    def test_every_event_type_is_classified(self):
        for event_type in EventType:
            assert entity_type_for(event_type.value) != EntityType.UNKNOWN
