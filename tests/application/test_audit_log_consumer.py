"""Tests for the audit consumer, end to end over the in-memory bus."""

import logging

from catalog.application.audit_log_consumer import AUDITED_TOPICS, AuditLogConsumer
from catalog.application.create_category import CreateCategoryHandler
from catalog.application.create_product import CreateProductHandler
from catalog.application.event_publisher import EventPublisher
from catalog.application.message_bus import PRODUCT_EVENTS_TOPIC, BusMessage
from catalog.application.update_product_description import UpdateProductDescriptionHandler
from catalog.domain.model.audit_record import EntityType
from catalog.infrastructure.messaging.memory_bus import InMemoryMessageBus
from tests.fakes import FakeAuditLogRepository, FakeCategoryRepository, FakeProductRepository

_LOGGER = "catalog.application.audit_log_consumer"


def _running_consumer(audit_repo=None):
    bus = InMemoryMessageBus()
    audit_repo = audit_repo or FakeAuditLogRepository()
    consumer = AuditLogConsumer(audit_repo, bus)
    consumer.start()
    return consumer, bus, audit_repo


class TestAuditLogConsumer:

    def test_subscribes_to_both_catalog_topics(self):
        assert AUDITED_TOPICS == ["catalog.product.events", "catalog.category.events"]

    def test_commands_end_up_in_the_audit_log(self):
        _, bus, audit_repo = _running_consumer()
        publisher = EventPublisher(bus)
        categories = FakeCategoryRepository()
        products = FakeProductRepository()

        category = CreateCategoryHandler(categories, publisher).handle("Electronics")
        product = CreateProductHandler(products, categories, publisher).handle(
            "Laptop", category_ids=[category.id]
        )
        UpdateProductDescriptionHandler(products, publisher).handle(product.id, "Thin")

        records = audit_repo.list_all()
        assert [(r.entity_type, r.event_type, r.entity_id) for r in records] == [
            (EntityType.CATEGORY, "CATEGORY_CREATED", category.id),
            (EntityType.PRODUCT, "PRODUCT_CREATED", product.id),
            (EntityType.PRODUCT, "PRODUCT_DESCRIPTION_UPDATED", product.id),
        ]
        assert records[1].payload["name"] == "Laptop"

    def test_messages_sent_before_subscribing_are_skipped(self):
        bus = InMemoryMessageBus(connected=True)
        bus.send(PRODUCT_EVENTS_TOPIC, "p0", '{"eventType": "PRODUCT_CREATED", "aggregateId": "p0"}')
        audit_repo = FakeAuditLogRepository()

        AuditLogConsumer(audit_repo, bus).start()

        assert audit_repo.list_all() == []

    def test_invalid_json_is_logged_and_skipped(self, caplog):
        consumer, bus, audit_repo = _running_consumer()

        with caplog.at_level(logging.ERROR, logger=_LOGGER):
            bus.send(PRODUCT_EVENTS_TOPIC, "p1", "{not json")
            bus.send(PRODUCT_EVENTS_TOPIC, "p2", '{"eventType": "PRODUCT_ARCHIVED", "aggregateId": "p2"}')

        assert "Failed to process message" in caplog.text
        [record] = audit_repo.list_all()
        assert record.entity_id == "p2"

    def test_repository_failure_does_not_propagate(self, caplog):
        consumer = AuditLogConsumer(FakeAuditLogRepository(fail_with=OSError("disk full")),
                                    InMemoryMessageBus())
        message = BusMessage(key="p1", value='{"eventType": "PRODUCT_ARCHIVED", "aggregateId": "p1"}')

        with caplog.at_level(logging.ERROR, logger=_LOGGER):
            consumer.handle_message(PRODUCT_EVENTS_TOPIC, 0, message)

        assert "disk full" in caplog.text

    def test_empty_value_is_skipped_with_warning(self, caplog):
        audit_repo = FakeAuditLogRepository()
        consumer = AuditLogConsumer(audit_repo, InMemoryMessageBus())

        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            consumer.handle_message(PRODUCT_EVENTS_TOPIC, 0, BusMessage(key="p1", value=None))

        assert audit_repo.list_all() == []
        assert "without value" in caplog.text

    def test_unknown_event_type_is_recorded_as_unknown(self):
        audit_repo = FakeAuditLogRepository()
        consumer = AuditLogConsumer(audit_repo, InMemoryMessageBus())

        consumer.handle_message(
            PRODUCT_EVENTS_TOPIC, 0,
            BusMessage(key="x", value='{"eventType": "SOMETHING_ELSE", "aggregateId": "x", "data": {"a": 1}}'),
        )

        [record] = audit_repo.list_all()
        assert record.entity_type == EntityType.UNKNOWN
        assert record.payload == {"a": 1}

    def test_stop_disconnects(self):
        consumer, bus, audit_repo = _running_consumer()

        consumer.stop()

        assert not bus.is_connected
