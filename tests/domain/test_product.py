"""Unit tests for the Product aggregate and its state machine."""

import pytest

from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductAttribute, ProductStatus


def _draft(categories=("c1",), attributes=(("color", "red"),)) -> Product:
    return Product.create(
        name="Laptop",
        category_ids=list(categories),
        attributes=[ProductAttribute(k, v) for k, v in attributes],
    )


def _active(**kwargs) -> Product:
    product = _draft(**kwargs)
    product.activate()
    return product


class TestProductCreation:

    def test_starts_in_draft(self):
        product = Product.create("Laptop")
        assert product.status == ProductStatus.DRAFT
        assert product.attributes == []
        assert product.category_ids == []
        assert product.id

    def test_name_is_trimmed(self):
        assert Product.create("  Laptop  ").name == "Laptop"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Product name is required"):
            Product.create("   ")

    def test_overlong_name_rejected(self):
        with pytest.raises(ValidationError, match="at most 255"):
            Product.create("x" * 256)

    def test_255_char_name_accepted(self):
        assert len(Product.create("x" * 255).name) == 255

    def test_duplicate_attribute_keys_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate attribute key: color"):
            Product.create(
                "Laptop",
                attributes=[ProductAttribute("color", "red"), ProductAttribute("color", "blue")],
            )

    def test_duplicate_category_ids_collapsed(self):
        product = Product.create("Laptop", category_ids=["c1", "c2", "c1"])
        assert product.category_ids == ["c1", "c2"]

    def test_non_scalar_attribute_value_rejected(self):
        with pytest.raises(ValidationError, match="string, number or boolean"):
            ProductAttribute("dims", [1, 2])


class TestActivation:

    def test_draft_becomes_active(self):
        product = _draft()
        product.activate()
        assert product.status == ProductStatus.ACTIVE

    def test_active_cannot_be_activated_again(self):
        product = _active()
        with pytest.raises(ValidationError, match="Only DRAFT"):
            product.activate()

    def test_archived_cannot_be_reactivated(self):
        product = _active()
        product.archive()
        with pytest.raises(ValidationError, match="cannot be reactivated"):
            product.activate()
        assert product.status == ProductStatus.ARCHIVED


class TestArchive:

    @pytest.mark.parametrize("factory", [_draft, _active])
    def test_archive_from_draft_or_active(self, factory):
        product = factory()
        product.archive()
        assert product.status == ProductStatus.ARCHIVED

    def test_archive_is_idempotent(self):
        product = _draft()
        product.archive()
        product.archive()
        assert product.status == ProductStatus.ARCHIVED


class TestCategories:

    def test_add_and_remove_on_draft(self):
        product = _draft(categories=())
        product.add_category("c9")
        assert product.category_ids == ["c9"]
        product.remove_category("c9")
        assert product.category_ids == []

    def test_add_twice_rejected(self):
        product = _draft()
        with pytest.raises(ValidationError, match="already associated"):
            product.add_category("c1")

    def test_remove_unknown_category_is_not_found(self):
        product = _draft()
        with pytest.raises(EntityNotFoundError, match="Category not associated"):
            product.remove_category("nope")

    def test_remove_last_category_of_active_rejected_and_state_kept(self):
        product = _active()
        with pytest.raises(ValidationError, match="ACTIVE product must have at least 1 category"):
            product.remove_category("c1")
        assert product.category_ids == ["c1"]

    def test_archived_rejects_category_changes(self):
        product = _active()
        product.archive()
        with pytest.raises(ValidationError, match="Cannot modify archived product"):
            product.add_category("c2")
        with pytest.raises(ValidationError, match="Cannot modify archived product"):
            product.remove_category("c1")


class TestAttributes:

    def test_add_update_remove_on_draft(self):
        product = _draft(attributes=())
        product.add_attribute("weight", 1.5)
        product.update_attribute("weight", 2)
        assert product.attributes == [ProductAttribute("weight", 2)]
        product.remove_attribute("weight")
        assert product.attributes == []

    def test_update_keeps_position(self):
        product = _draft(attributes=(("a", 1), ("b", 2), ("c", 3)))
        product.update_attribute("b", True)
        assert [str(a) for a in product.attributes] == ["a=1", "b=True", "c=3"]

    def test_duplicate_key_rejected(self):
        product = _draft()
        with pytest.raises(ValidationError, match='"color" already exists'):
            product.add_attribute("color", "blue")

    def test_unknown_key_is_not_found(self):
        product = _draft()
        with pytest.raises(EntityNotFoundError, match="Attribute not associated"):
            product.update_attribute("Color", "blue")
        with pytest.raises(EntityNotFoundError, match="Attribute not associated"):
            product.remove_attribute("Color")

    def test_remove_last_attribute_of_active_rejected(self):
        product = _active()
        with pytest.raises(ValidationError, match="ACTIVE product must have at least 1 attribute"):
            product.remove_attribute("color")
        assert len(product.attributes) == 1

    def test_archived_rejects_attribute_changes(self):
        product = _draft()
        product.archive()
        for action in (
            lambda: product.add_attribute("size", "L"),
            lambda: product.update_attribute("color", "blue"),
            lambda: product.remove_attribute("color"),
        ):
            with pytest.raises(ValidationError, match="Cannot modify archived product"):
                action()


class TestDescription:

    @pytest.mark.parametrize("archive", [False, True])
    def test_description_is_trimmed_in_any_status(self, archive):
        product = _active()
        if archive:
            product.archive()
        product.update_description("  Thin and light  ")
        assert product.description == "Thin and light"

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_description_rejected(self, blank):
        product = _draft()
        with pytest.raises(ValidationError, match="Description cannot be empty"):
            product.update_description(blank)
