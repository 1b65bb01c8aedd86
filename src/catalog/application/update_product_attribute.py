"""Application service: Update Product Attribute use case."""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import AttributeUpdated
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import AttributeValue
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductAttributeHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str, key: str, value: AttributeValue) -> Product:
        logger.info(
            "Updating product attribute product_id=%s key=%r new_value=%r",
            product_id,
            key,
            value,
        )

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        attribute = product.update_attribute(key, value)
        self._product_repo.save(product)

        self._publisher.publish(
            AttributeUpdated(product_id=product.id, key=attribute.key, value=attribute.value)
        )

        logger.info(
            "Product attribute updated successfully product_id=%s key=%r",
            product.id,
            key,
        )
        return product
