"""Application service: Create Category use case."""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import CategoryCreated
from catalog.domain.exceptions import ConflictError
from catalog.domain.model.category import Category
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.domain.rules import category_rules

logger = logging.getLogger(__name__)


class CreateCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        publisher: EventPublisher,
    ) -> None:
        self._category_repo = category_repo
        self._publisher = publisher

    def handle(self, name: str, parent_id: str | None = None) -> Category:
        logger.info("Creating category name=%r parent_id=%s", name, parent_id)

        category = Category.create(name=name, parent_id=parent_id)

        if self._category_repo.get_by_name(category.name) is not None:
            raise ConflictError("Category with this name already exists")

        if category.parent_id:
            parent = self._category_repo.get_by_id(category.parent_id)
            category_rules.validate_parent_exists(parent)

        self._category_repo.save(category)

        self._publisher.publish(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                parent_id=category.parent_id,
            )
        )

        logger.info("Category created successfully category_id=%s", category.id)
        return category
