"""Business rules for the product lifecycle.

State machine::

    DRAFT ──activate──> ACTIVE
      │                   │
      └──archive──> ARCHIVED <──archive──┘

ARCHIVED is terminal for the status. Archiving has no guard and is
idempotent, so there is no rule function for it.
"""

from __future__ import annotations

from collections.abc import Iterable

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import ProductAttribute, ProductStatus


def validate_can_activate(
    status: ProductStatus,
    category_count: int,
    attribute_count: int,
) -> None:
    if status == ProductStatus.ARCHIVED:
        raise ValidationError("Archived products cannot be reactivated")

    if status != ProductStatus.DRAFT:
        raise ValidationError("Only DRAFT products can be activated")

    # Category check wins when both are missing
    if category_count < 1:
        raise ValidationError("Product must have at least 1 category to be activated")

    if attribute_count < 1:
        raise ValidationError("Product must have at least 1 attribute to be activated")


def validate_can_update_categories_or_attributes(status: ProductStatus) -> None:
    """Categories and attributes of an ARCHIVED product are frozen.

    Description updates do not go through this rule.
    """
    if status == ProductStatus.ARCHIVED:
        raise ValidationError("Cannot modify archived product")


def validate_attribute_key_uniqueness(attributes: Iterable[ProductAttribute]) -> None:
    """Fail on the first duplicate key, naming it."""
    seen: set[str] = set()
    for attr in attributes:
        if attr.key in seen:
            raise ValidationError(f"Duplicate attribute key: {attr.key}")
        seen.add(attr.key)


def validate_attribute_key_not_exists(
    existing_attributes: Iterable[ProductAttribute],
    new_key: str,
) -> None:
    """Keys are compared case-sensitively."""
    if any(attr.key == new_key for attr in existing_attributes):
        raise ValidationError(f'Attribute with key "{new_key}" already exists')


def validate_active_minimums(
    status: ProductStatus,
    category_count: int,
    attribute_count: int,
) -> None:
    """An ACTIVE product keeps at least one category and one attribute."""
    if status != ProductStatus.ACTIVE:
        return
    if category_count < 1:
        raise ValidationError("ACTIVE product must have at least 1 category")
    if attribute_count < 1:
        raise ValidationError("ACTIVE product must have at least 1 attribute")
