"""Value Objects shared across the catalog domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from catalog.domain.exceptions import ValidationError

AttributeValue = Union[str, int, float, bool]

MAX_NAME_LENGTH = 255


class ProductStatus(Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class ProductAttribute:
    """A single ``key: value`` pair describing a product.

    Keys are case-sensitive. Values are scalars only, so that they
    survive a JSON round trip unchanged.
    """

    key: str
    value: AttributeValue

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key.strip():
            raise ValidationError("Attribute key is required")
        if not isinstance(self.value, (str, int, float, bool)):
            raise ValidationError(
                f"Attribute '{self.key}' must be a string, number or boolean, "
                f"got {type(self.value).__name__}"
            )

    def with_value(self, value: AttributeValue) -> ProductAttribute:
        return ProductAttribute(self.key, value)

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def clean_name(name: str, kind: str) -> str:
    """Trim *name* and enforce the shared naming constraints."""
    if not name or not name.strip():
        raise ValidationError(f"{kind} name is required")
    cleaned = name.strip()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"{kind} name must be at most {MAX_NAME_LENGTH} characters"
        )
    return cleaned
