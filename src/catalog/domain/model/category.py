"""Category aggregate.

Categories form a tree through ``parent_id``. The hierarchy rules live
in ``catalog.domain.rules.category_rules``; checks that need a lookup
(does the parent exist?) are coordinated by the application handlers.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from catalog.domain.model.value_objects import clean_name
from catalog.domain.rules import category_rules


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Category:
    """Aggregate root for a node of the category tree.

    Use ``Category.create()`` for new categories. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    categories without re-validating.
    """

    id: str
    name: str
    parent_id: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    version: int = 0  # optimistic-lock counter, bumped by the repository

    @staticmethod
    def create(name: str, parent_id: str | None = None) -> Category:
        return Category(
            id=str(uuid.uuid4()),
            name=clean_name(name, "Category"),
            parent_id=parent_id or None,
        )

    def rename(self, new_name: str) -> None:
        self.name = clean_name(new_name, "Category")
        self.updated_at = _now()

    def move_to(self, parent_id: str | None) -> None:
        """Re-parent the category; ``None`` makes it a root."""
        if parent_id:
            category_rules.validate_not_self_reference(self.id, parent_id)
        self.parent_id = parent_id or None
        self.updated_at = _now()
