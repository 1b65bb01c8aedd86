"""Business rules for the category hierarchy.

Pure functions: no I/O, no mutation. Each raises ValidationError when
the rule is broken and returns None otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from catalog.domain.model.category import Category


def validate_not_self_reference(category_id: str, parent_id: str) -> None:
    """A category cannot be the parent of itself.

    Only the direct self-reference is checked; longer cycles
    (A -> B -> A) are not detected.
    """
    if category_id == parent_id:
        raise ValidationError("A category cannot be its own parent")


def validate_name_uniqueness(existing_name: str | None, candidate_name: str) -> None:
    if existing_name and existing_name.lower() == candidate_name.lower():
        raise ValidationError(f'Category with name "{candidate_name}" already exists')


def validate_parent_exists(parent: Category | None) -> None:
    if parent is None:
        raise ValidationError("Parent category not found")
