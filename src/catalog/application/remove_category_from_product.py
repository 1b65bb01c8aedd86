"""Application service: Remove Category from Product use case.

An ACTIVE product must keep at least one category; the same removal on
a DRAFT product is allowed.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import CategoryRemovedFromProduct
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class RemoveCategoryFromProductHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str, category_id: str) -> Product:
        logger.info(
            "Removing category from product product_id=%s category_id=%s",
            product_id,
            category_id,
        )

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.remove_category(category_id)
        self._product_repo.save(product)

        self._publisher.publish(
            CategoryRemovedFromProduct(product_id=product.id, category_id=category_id)
        )

        logger.info(
            "Category removed from product successfully product_id=%s category_id=%s",
            product.id,
            category_id,
        )
        return product
