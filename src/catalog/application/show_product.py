"""Application service: Show / List Products use cases (queries)."""

from __future__ import annotations

from catalog.application.dto import ProductDTO
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.category_repository import CategoryRepository
from catalog.domain.repository.product_repository import ProductRepository


class _ProductQuery:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def _to_dto(self, product: Product) -> ProductDTO:
        names = {c.id: c.name for c in self._category_repo.get_by_ids(product.category_ids)}
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            status=product.status.value,
            attributes=[str(a) for a in product.attributes],
            # A dangling reference shows its raw id
            category_names=[names.get(cid, cid) for cid in product.category_ids],
            updated_at=product.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


class ShowProductHandler(_ProductQuery):

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")
        return self._to_dto(product)


class ListProductsHandler(_ProductQuery):

    def handle(self) -> list[ProductDTO]:
        products = sorted(self._product_repo.list_all(), key=lambda p: p.name.lower())
        return [self._to_dto(p) for p in products]
