"""Application service: Show / List Categories use cases (queries)."""

from __future__ import annotations

from catalog.application.dto import CategoryDTO
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.category import Category
from catalog.domain.repository.category_repository import CategoryRepository


def to_category_dto(category: Category) -> CategoryDTO:
    return CategoryDTO(
        id=category.id,
        name=category.name,
        parent_id=category.parent_id,
        updated_at=category.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


class ShowCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, category_id: str) -> CategoryDTO:
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category not found")
        return to_category_dto(category)


class ListCategoriesHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self) -> list[CategoryDTO]:
        categories = sorted(self._category_repo.list_all(), key=lambda c: c.name.lower())
        return [to_category_dto(c) for c in categories]
