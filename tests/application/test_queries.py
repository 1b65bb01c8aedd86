"""Tests for the read-side query handlers."""

import pytest

from catalog.application.show_audit_log import AuditSummaryHandler, ShowAuditLogHandler
from catalog.application.show_category import ListCategoriesHandler, ShowCategoryHandler
from catalog.application.show_product import ListProductsHandler, ShowProductHandler
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.audit_record import AuditRecord, EntityType
from catalog.domain.model.category import Category
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductAttribute, ProductStatus
from tests.fakes import FakeAuditLogRepository, FakeCategoryRepository, FakeProductRepository


@pytest.fixture
def categories():
    return FakeCategoryRepository([
        Category(id="c1", name="electronics"),
        Category(id="c2", name="Books", parent_id=None),
        Category(id="c3", name="Laptops", parent_id="c1"),
    ])


class TestCategoryQueries:

    def test_show(self, categories):
        dto = ShowCategoryHandler(categories).handle("c3")
        assert dto.name == "Laptops"
        assert dto.parent_id == "c1"

    def test_show_missing(self, categories):
        with pytest.raises(EntityNotFoundError, match="Category not found"):
            ShowCategoryHandler(categories).handle("nope")

    def test_list_sorted_by_name_ignoring_case(self, categories):
        names = [c.name for c in ListCategoriesHandler(categories).handle()]
        assert names == ["Books", "electronics", "Laptops"]


class TestProductQueries:

    def test_show_resolves_category_names(self, categories):
        products = FakeProductRepository([
            Product(
                id="p1",
                name="Laptop",
                status=ProductStatus.ACTIVE,
                category_ids=["c3", "gone"],
                attributes=[ProductAttribute("ram", 16)],
            )
        ])

        dto = ShowProductHandler(products, categories).handle("p1")

        assert dto.status == "ACTIVE"
        assert dto.category_names == ["Laptops", "gone"]
        assert dto.attributes == ["ram=16"]

    def test_show_missing(self, categories):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            ShowProductHandler(FakeProductRepository(), categories).handle("nope")

    def test_list(self, categories):
        products = FakeProductRepository([Product(id="p2", name="Zebra"), Product(id="p1", name="apple")])
        assert [p.id for p in ListProductsHandler(products, categories).handle()] == ["p1", "p2"]


def _audit_repo():
    repo = FakeAuditLogRepository()
    for event_type, entity_id in [
        ("CATEGORY_CREATED", "c1"),
        ("PRODUCT_CREATED", "p1"),
        ("ATTRIBUTE_ADDED_TO_PRODUCT", "p1"),
        ("PRODUCT_CREATED", "p2"),
        ("CATEGORY_ADDED_TO_PRODUCT", "p1"),
    ]:
        repo.append(AuditRecord.from_event(event_type, entity_id, {}))
    return repo


class TestAuditQueries:

    def test_newest_first(self):
        records = ShowAuditLogHandler(_audit_repo()).handle()
        assert [r.event_type for r in records][0] == "CATEGORY_ADDED_TO_PRODUCT"
        assert len(records) == 5

    def test_for_entity(self):
        records = ShowAuditLogHandler(_audit_repo()).for_entity(EntityType.PRODUCT, "p1")
        assert [r.event_type for r in records] == [
            "CATEGORY_ADDED_TO_PRODUCT",
            "ATTRIBUTE_ADDED_TO_PRODUCT",
            "PRODUCT_CREATED",
        ]

    def test_for_event_type_with_limit(self):
        records = ShowAuditLogHandler(_audit_repo()).for_event_type("PRODUCT_CREATED", limit=1)
        assert [r.entity_id for r in records] == ["p2"]

    def test_summary(self):
        summary = AuditSummaryHandler(_audit_repo()).handle()

        assert summary.total == 5
        top = summary.by_type[0]
        assert (top.entity_type, top.event_type, top.count) == ("Product", "PRODUCT_CREATED", 2)
        assert sum(row.count for row in summary.by_type) == 5
