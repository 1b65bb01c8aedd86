"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from catalog.domain.exceptions import ConcurrentModificationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductAttribute, ProductStatus
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.json_file_store import JsonFileStore


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()

        stored = products.get(product.id)
        if stored is not None and stored.version != product.version:
            raise ConcurrentModificationError(
                f"Product {product.id} was modified concurrently "
                f"(expected version {product.version}, found {stored.version})"
            )

        product.version += 1
        products[product.id] = product
        self._store.persist([self._to_raw(p) for p in products.values()])

    # --- Serialization --------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {raw["id"]: self._to_domain(raw) for raw in self._store.load()}

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "status": product.status.value,
            "attributes": [{"key": a.key, "value": a.value} for a in product.attributes],
            "category_ids": list(product.category_ids),
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
            "version": product.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            status=ProductStatus(raw["status"]),
            attributes=[ProductAttribute(a["key"], a["value"]) for a in raw["attributes"]],
            category_ids=list(raw.get("category_ids", [])),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )
