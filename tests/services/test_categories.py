from datetime import date

import pytest

from errors import DuplicateNameError, ValidationError


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category(self, services):
        """Test creating a simple category."""
        category = services.categories.create("Electronics")

        assert category.id
        assert category.name == "Electronics"
        assert services.categories.find(category.id) is category

    def test_create_persists(self, services):
        """Test that a created category survives a reload."""
        services.categories.create("Books")

        services.store.load()

        assert [c.name for c in services.categories.find_all()] == ["Books"]

    def test_create_empty_name_raises(self, services):
        """Test that an empty name is rejected without touching the store."""
        with pytest.raises(ValidationError):
            services.categories.create("")

        assert services.categories.find_all() == []

    def test_whitespace_name_is_allowed(self, services):
        """Test that names are not trimmed before validation."""
        category = services.categories.create("   ")

        assert category.name == "   "

    def test_create_duplicate_name_raises(self, services):
        """Test that a duplicate name fails and leaves one category."""
        services.categories.create("Electronics")

        with pytest.raises(DuplicateNameError) as exc_info:
            services.categories.create("Electronics")

        assert exc_info.value.name == "Electronics"
        names = [c.name for c in services.categories.find_all()]
        assert names.count("Electronics") == 1

    def test_duplicate_is_a_validation_error(self, services):
        services.categories.create("Tools")

        with pytest.raises(ValidationError):
            services.categories.create("Tools")

    def test_duplicate_check_is_case_sensitive(self, services):
        """Test that names differing in case are distinct."""
        services.categories.create("Shopping")

        services.categories.create("shopping")

        assert len(services.categories.find_all()) == 2

    def test_duplicate_check_does_not_trim(self, services):
        services.categories.create("Shopping")

        services.categories.create("Shopping ")

        assert len(services.categories.find_all()) == 2

    def test_find_by_name(self, services):
        created = services.categories.create("Entertainment")

        assert services.categories.find_by_name("Entertainment") is created
        assert services.categories.find_by_name("entertainment") is None

    def test_find_all_in_creation_order(self, services):
        """Test that categories are listed in the order they were created."""
        for name in ["Zebra", "Alpha", "Beta"]:
            services.categories.create(name)

        names = [c.name for c in services.categories.find_all()]

        assert names == ["Zebra", "Alpha", "Beta"]

    def test_find_missing_returns_none(self, services):
        assert services.categories.find("nope") is None


class TestCategoryDelete:
    """Deleting a category cascades to its items."""

    def test_delete_with_three_items(self, services):
        """Test that deleting a category removes exactly its 3 items."""
        electronics = services.categories.create("Electronics")
        for i in range(3):
            services.items.create(f"Gadget {i}", "10", date(2024, 1, i + 1), electronics)
        services.items.create("Sofa", "900", date(2024, 1, 1))
        before = len(services.items.find_all())

        deleted = services.categories.delete(electronics)

        assert deleted == 3
        assert len(services.items.find_all()) == before - 3
        assert services.categories.find(electronics.id) is None

        services.store.load()
        assert [i.name for i in services.items.find_all()] == ["Sofa"]

    def test_delete_empty_category(self, services):
        category = services.categories.create("Empty")

        assert services.categories.delete(category) == 0
        assert services.categories.find_all() == []

    def test_count_items(self, services):
        category = services.categories.create("Kitchen")
        services.items.create("Kettle", "25", date(2024, 1, 1), category)

        assert services.categories.count_items(category) == 1
