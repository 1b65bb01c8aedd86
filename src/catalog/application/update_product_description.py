"""Application service: Update Product Description use case.

Works in every status, ARCHIVED included.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import ProductDescriptionUpdated
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductDescriptionHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str, description: str | None) -> Product:
        logger.info("Updating product description product_id=%s", product_id)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.update_description(description)
        self._product_repo.save(product)

        logger.info(
            "Product description updated successfully product_id=%s length=%d",
            product.id,
            len(product.description or ""),
        )

        self._publisher.publish(
            ProductDescriptionUpdated(
                product_id=product.id,
                description=product.description or "",
            )
        )
        return product
