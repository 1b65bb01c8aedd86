"""Application service: Create Product use case.

Resolves the referenced categories, lets the Product aggregate validate
its attributes, persists the new DRAFT product and announces it.
"""

from __future__ import annotations

import logging

from catalog.application.dto import AttributeSpec
from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import ProductCreated
from catalog.domain.exceptions import ConflictError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductAttribute
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._publisher = publisher

    def handle(
        self,
        name: str,
        description: str | None = None,
        category_ids: list[str] | None = None,
        attributes: list[AttributeSpec] | None = None,
    ) -> Product:
        logger.info("Creating product name=%r", name)

        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise ConflictError("Product with this name already exists")

        unique_ids = list(dict.fromkeys(category_ids or []))
        if unique_ids:
            found = self._category_repo.get_by_ids(unique_ids)
            if len(found) != len(unique_ids):
                raise ValidationError("One or more categories not found")

        product = Product.create(
            name=name,
            description=description,
            category_ids=unique_ids,
            attributes=[ProductAttribute(a.key, a.value) for a in attributes or []],
        )
        self._product_repo.save(product)

        self._publisher.publish(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                description=product.description,
            )
        )

        logger.info("Product created successfully product_id=%s", product.id)
        return product
