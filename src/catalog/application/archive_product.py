"""Application service: Archive Product use case.

Archiving has no precondition besides existence and is idempotent:
archiving an ARCHIVED product succeeds and still announces the command.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import ProductArchived
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ArchiveProductHandler:

    def __init__(self, product_repo: ProductRepository, publisher: EventPublisher) -> None:
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, product_id: str) -> Product:
        logger.info("Archiving product product_id=%s", product_id)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.archive()
        self._product_repo.save(product)

        logger.info("Product archived successfully product_id=%s", product.id)

        self._publisher.publish(ProductArchived(product_id=product.id))
        return product
