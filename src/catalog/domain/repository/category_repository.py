"""Abstract repository for Category aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: str) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return the category whose name matches case-insensitively, or None."""

    @abstractmethod
    def get_by_ids(self, category_ids: list[str]) -> list[Category]:
        """Return the categories that exist among *category_ids*."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist a new or updated category.

        Raises ConcurrentModificationError if the stored version no longer
        matches ``category.version``; on success the version is bumped.
        """
