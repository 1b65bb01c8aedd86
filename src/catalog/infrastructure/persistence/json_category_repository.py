"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from catalog.domain.exceptions import ConcurrentModificationError
from catalog.domain.model.category import Category
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.infrastructure.persistence.json_file_store import JsonFileStore


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- CategoryRepository interface -----------------------------------------

    def get_by_id(self, category_id: str) -> Category | None:
        return self._load().get(category_id)

    def get_by_name(self, name: str) -> Category | None:
        for category in self._load().values():
            if category.name.lower() == name.lower():
                return category
        return None

    def get_by_ids(self, category_ids: list[str]) -> list[Category]:
        categories = self._load()
        return [categories[cid] for cid in dict.fromkeys(category_ids) if cid in categories]

    def list_all(self) -> list[Category]:
        return list(self._load().values())

    def save(self, category: Category) -> None:
        categories = self._load()

        stored = categories.get(category.id)
        if stored is not None and stored.version != category.version:
            raise ConcurrentModificationError(
                f"Category {category.id} was modified concurrently "
                f"(expected version {category.version}, found {stored.version})"
            )

        category.version += 1
        categories[category.id] = category
        self._store.persist([self._to_raw(c) for c in categories.values()])

    # --- Serialization --------------------------------------------------------

    def _load(self) -> dict[str, Category]:
        return {raw["id"]: self._to_domain(raw) for raw in self._store.load()}

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "parent_id": category.parent_id,
            "created_at": category.created_at.isoformat(),
            "updated_at": category.updated_at.isoformat(),
            "version": category.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            parent_id=raw.get("parent_id"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )
