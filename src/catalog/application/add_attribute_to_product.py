"""Application service: Add Attribute to Product use case."""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import AttributeAddedToProduct
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import AttributeValue
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddAttributeToProductHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str, key: str, value: AttributeValue) -> Product:
        logger.info("Adding attribute to product product_id=%s key=%r", product_id, key)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        attribute = product.add_attribute(key, value)
        self._product_repo.save(product)

        logger.info("Attribute added to product successfully product_id=%s", product.id)

        self._publisher.publish(
            AttributeAddedToProduct(
                product_id=product.id,
                key=attribute.key,
                value=attribute.value,
            )
        )
        return product
