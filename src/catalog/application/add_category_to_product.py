"""Application service: Add Category to Product use case."""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import CategoryAddedToProduct
from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.rules import product_rules

logger = logging.getLogger(__name__)


class AddCategoryToProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._publisher = publisher

    def handle(self, product_id: str, category_id: str) -> Product:
        logger.info(
            "Adding category to product product_id=%s category_id=%s",
            product_id,
            category_id,
        )

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        # The archived check comes before the category lookup
        product_rules.validate_can_update_categories_or_attributes(product.status)

        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise ValidationError("Category not found")

        product.add_category(category.id)
        self._product_repo.save(product)

        logger.info("Category added to product successfully product_id=%s", product.id)

        self._publisher.publish(
            CategoryAddedToProduct(product_id=product.id, category_id=category.id)
        )
        return product
