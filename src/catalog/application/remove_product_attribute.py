"""Application service: Remove Product Attribute use case.

An ACTIVE product must keep at least one attribute.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import AttributeRemovedFromProduct
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class RemoveProductAttributeHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str, key: str) -> Product:
        logger.info("Removing attribute from product product_id=%s key=%r", product_id, key)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.remove_attribute(key)
        self._product_repo.save(product)

        self._publisher.publish(AttributeRemovedFromProduct(product_id=product.id, key=key))

        logger.info(
            "Attribute removed from product successfully product_id=%s key=%r",
            product.id,
            key,
        )
        return product
