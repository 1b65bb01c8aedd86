"""Data Transfer Objects -- plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.model.value_objects import AttributeValue


@dataclass(frozen=True)
class AttributeSpec:
    """Input: one attribute requested for a new product."""

    key: str
    value: AttributeValue


@dataclass(frozen=True)
class AuditSummaryRow:
    entity_type: str
    event_type: str
    count: int


@dataclass(frozen=True)
class AuditSummary:
    """Output: audit record counts grouped by entity and event type."""

    total: int
    by_type: list[AuditSummaryRow]


@dataclass(frozen=True)
class CategoryDTO:
    """Output: a category as displayed to the user."""

    id: str
    name: str
    parent_id: str | None
    updated_at: str


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    description: str | None
    status: str
    attributes: list[str]  # formatted, e.g. "color=blue"
    category_names: list[str]
    updated_at: str
