"""Product aggregate.

A product moves through DRAFT -> ACTIVE -> ARCHIVED (or straight from
DRAFT to ARCHIVED). It owns its attributes and references categories by
id. Every mutation checks the rules *before* changing state, so a
rejected command never leaves the aggregate half-modified.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.value_objects import (
    AttributeValue,
    ProductAttribute,
    ProductStatus,
    clean_name,
)
from catalog.domain.rules import product_rules


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Aggregate root for a catalog product.

    Use the ``Product.create()`` factory for new products -- it enforces
    all creation rules. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted products without re-validating.
    """

    id: str
    name: str
    description: str | None = None
    status: ProductStatus = ProductStatus.DRAFT
    attributes: list[ProductAttribute] = field(default_factory=list)
    category_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    version: int = 0

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str | None = None,
        category_ids: list[str] | None = None,
        attributes: list[ProductAttribute] | None = None,
    ) -> Product:
        attributes = list(attributes or [])
        product_rules.validate_attribute_key_uniqueness(attributes)

        return Product(
            id=str(uuid.uuid4()),
            name=clean_name(name, "Product"),
            description=description or None,
            attributes=attributes,
            category_ids=list(dict.fromkeys(category_ids or [])),
        )

    # --- State transitions ----------------------------------------------------

    def activate(self) -> None:
        """Transition DRAFT -> ACTIVE."""
        product_rules.validate_can_activate(
            self.status, len(self.category_ids), len(self.attributes)
        )
        self._set_status(ProductStatus.ACTIVE)

    def archive(self) -> None:
        """Transition DRAFT|ACTIVE -> ARCHIVED. Archiving twice is a no-op."""
        if self.status != ProductStatus.ARCHIVED:
            self._set_status(ProductStatus.ARCHIVED)

    # --- Categories -----------------------------------------------------------

    def add_category(self, category_id: str) -> None:
        product_rules.validate_can_update_categories_or_attributes(self.status)
        if category_id in self.category_ids:
            raise ValidationError("Category already associated with this product")
        self.category_ids.append(category_id)
        self._touch()

    def remove_category(self, category_id: str) -> None:
        product_rules.validate_can_update_categories_or_attributes(self.status)
        if category_id not in self.category_ids:
            raise EntityNotFoundError("Category not associated with this product")

        remaining = [c for c in self.category_ids if c != category_id]
        product_rules.validate_active_minimums(
            self.status, len(remaining), len(self.attributes)
        )
        self.category_ids = remaining
        self._touch()

    # --- Attributes -----------------------------------------------------------

    def add_attribute(self, key: str, value: AttributeValue) -> ProductAttribute:
        product_rules.validate_can_update_categories_or_attributes(self.status)
        product_rules.validate_attribute_key_not_exists(self.attributes, key)

        attribute = ProductAttribute(key, value)
        self.attributes.append(attribute)
        self._touch()
        return attribute

    def update_attribute(self, key: str, value: AttributeValue) -> ProductAttribute:
        product_rules.validate_can_update_categories_or_attributes(self.status)
        index = self._attribute_index(key)

        attribute = self.attributes[index].with_value(value)
        self.attributes[index] = attribute
        self._touch()
        return attribute

    def remove_attribute(self, key: str) -> None:
        product_rules.validate_can_update_categories_or_attributes(self.status)
        index = self._attribute_index(key)

        remaining = self.attributes[:index] + self.attributes[index + 1:]
        product_rules.validate_active_minimums(
            self.status, len(self.category_ids), len(remaining)
        )
        self.attributes = remaining
        self._touch()

    # --- Description ----------------------------------------------------------

    def update_description(self, description: str | None) -> None:
        """Replace the description. Allowed in every status, ARCHIVED included."""
        if not description or not description.strip():
            raise ValidationError("Description cannot be empty")
        self.description = description.strip()
        self._touch()

    # --- Internal helpers -----------------------------------------------------

    def _attribute_index(self, key: str) -> int:
        for i, attr in enumerate(self.attributes):
            if attr.key == key:
                return i
        raise EntityNotFoundError("Attribute not associated with this product")

    def _set_status(self, status: ProductStatus) -> None:
        self.status = status
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _now()
