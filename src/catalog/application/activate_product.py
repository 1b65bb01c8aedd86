"""Application service: Activate Product use case.

A DRAFT product becomes ACTIVE once it has at least one category and
one attribute. ARCHIVED products can never be reactivated.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import ProductActivated
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ActivateProductHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str) -> Product:
        logger.info("Activating product product_id=%s", product_id)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.activate()
        self._product_repo.save(product)

        logger.info("Product activated successfully product_id=%s", product.id)

        self._publisher.publish(ProductActivated(product_id=product.id))
        return product
