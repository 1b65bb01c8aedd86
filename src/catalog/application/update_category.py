"""Application service: Update Category use case.

Name and parent are both optional. A name that differs only in case
from the current one is a rename of the same category, not a conflict.
Passing an empty ``parent_id`` moves the category to the root; passing
``None`` leaves the parent untouched.
"""

from __future__ import annotations

import logging

from catalog.application.event_publisher import EventPublisher
from catalog.domain.events import CategoryUpdated
from catalog.domain.exceptions import ConflictError, EntityNotFoundError
from catalog.domain.model.category import Category
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.domain.rules import category_rules

logger = logging.getLogger(__name__)


class UpdateCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        publisher: EventPublisher,
    ) -> None:
        self._category_repo = category_repo
        self._publisher = publisher

    def handle(
        self,
        category_id: str,
        name: str | None = None,
        parent_id: str | None = None,
    ) -> Category:
        logger.info("Updating category category_id=%s", category_id)

        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category not found")

        if name and name != category.name:
            existing = self._category_repo.get_by_name(name.strip())
            if existing is not None and existing.id != category.id:
                raise ConflictError("Category with this name already exists")
            category.rename(name)

        if parent_id is not None and (parent_id or None) != category.parent_id:
            if parent_id:
                # Self-reference is rejected before the lookup
                category_rules.validate_not_self_reference(category.id, parent_id)
                parent = self._category_repo.get_by_id(parent_id)
                category_rules.validate_parent_exists(parent)
            category.move_to(parent_id)

        self._category_repo.save(category)

        self._publisher.publish(
            CategoryUpdated(
                category_id=category.id,
                name=category.name,
                parent_id=category.parent_id,
            )
        )

        logger.info("Category updated successfully category_id=%s", category.id)
        return category
