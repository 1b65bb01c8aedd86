"""Unit tests for the category hierarchy rules."""

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.category import Category
from catalog.domain.rules import category_rules


class TestNotSelfReference:

    @pytest.mark.parametrize("category_id", ["a", "7f1c", "same-id"])
    def test_same_id_rejected(self, category_id):
        with pytest.raises(ValidationError, match="cannot be its own parent"):
            category_rules.validate_not_self_reference(category_id, category_id)

    def test_different_ids_accepted(self):
        category_rules.validate_not_self_reference("a", "b")

    def test_ids_compared_exactly(self):
        category_rules.validate_not_self_reference("abc", "ABC")


class TestNameUniqueness:

    def test_case_insensitive_match_rejected(self):
        with pytest.raises(ValidationError, match='"electronics" already exists'):
            category_rules.validate_name_uniqueness("Electronics", "electronics")

    def test_different_name_accepted(self):
        category_rules.validate_name_uniqueness("Electronics", "Books")

    def test_no_existing_name_accepted(self):
        category_rules.validate_name_uniqueness(None, "Books")


class TestParentExists:

    def test_missing_parent_rejected(self):
        with pytest.raises(ValidationError, match="Parent category not found"):
            category_rules.validate_parent_exists(None)

    def test_existing_parent_accepted(self):
        category_rules.validate_parent_exists(Category.create("Root"))
