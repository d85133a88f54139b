"""
Tests for catalog schemas, tolerant catalog loading and category resolution.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from catalog_engine.catalog.schemas import CatalogItem, CategorySchema, ProductColor
from catalog_engine.catalog.services import (
    build_category_lookup, load_catalog, load_categories, resolve_category_name,
)
from catalog_engine.common.logs import configure_logging


@pytest.fixture
def captured_logs():
    """Collect loguru messages emitted during a test."""
    messages = []
    configure_logging("WARNING", sink=lambda message: messages.append(message.record["message"]))
    yield messages


class TestCatalogItem:
    """Test the CatalogItem schema."""

    def test_minimal_item(self):
        item = CatalogItem(id="1", name="Tee")
        assert item.category == ""
        assert item.description == ""
        assert item.tags is None
        assert item.price == 0
        assert item.inStock is True
        assert item.colors == []

    def test_missing_name(self):
        with pytest.raises(ValidationError) as exc_info:
            CatalogItem(id="1")
        assert "name" in str(exc_info.value)

    def test_negative_price(self):
        with pytest.raises(ValidationError) as exc_info:
            CatalogItem(id="1", name="Tee", price=-1)
        assert "price" in str(exc_info.value)

    def test_numeric_id_is_coerced(self):
        assert CatalogItem(id=42, name="Tee").id == "42"

    def test_tags_from_string(self):
        item = CatalogItem(id="1", name="Tee", tags="organic, basics, ,cotton")
        assert item.tags == ["organic", "basics", "cotton"]

    def test_colors_from_strings(self):
        item = CatalogItem(id="1", name="Tee", colors=["Black", {"name": "White", "hex": "#FFF"}, {"hex": "#000"}, " "])
        assert item.colors == [ProductColor(name="Black"), ProductColor(name="White", hex="#FFF")]

    def test_snake_case_stock_flag(self):
        assert CatalogItem.model_validate({"id": "1", "name": "Tee", "in_stock": False}).inStock is False
        assert CatalogItem(id="1", name="Tee", inStock=False).inStock is False

    def test_none_text_fields(self):
        item = CatalogItem(id="1", name="Tee", description=None, category=None, sizes=None)
        assert item.description == ""
        assert item.category == ""
        assert item.sizes == []

    def test_iso_timestamp_with_z(self):
        item = CatalogItem(id="1", name="Tee", createdAt="2025-10-15T00:00:00.000Z")
        assert item.createdAt == datetime(2025, 10, 15, tzinfo=timezone.utc)

    def test_verbose_timestamp(self):
        item = CatalogItem(id="1", name="Tee", updatedAt="Apr 12, 2025 9:20:43 PM")
        assert item.updatedAt.hour == 21
        assert item.updatedAt.tzinfo is not None

    def test_naive_timestamp_is_localized(self):
        item = CatalogItem(id="1", name="Tee", createdAt="2025-04-12 08:00:00")
        assert item.createdAt.utcoffset() is not None

    def test_invalid_timestamp(self):
        with pytest.raises(ValidationError):
            CatalogItem(id="1", name="Tee", createdAt="sometime last spring")


class TestLoadCatalog:
    """Test the tolerant catalog loader."""

    def test_skips_invalid_records(self, captured_logs):
        items = load_catalog([
            {"id": "1", "name": "Tee", "price": 10},
            {"id": "2", "price": 10},
            {"id": "3", "name": "Hoodie", "price": -5},
            {},
            None,
            {"id": "", "name": "No Id"},
            {"id": "4", "name": "Leggings"},
        ])

        assert [item.id for item in items] == ["1", "4"]
        assert len(captured_logs) == 5

    def test_duplicate_ids_keep_first(self, captured_logs):
        items = load_catalog([
            {"id": "1", "name": "First"},
            {"id": "1", "name": "Second"},
        ])

        assert [item.name for item in items] == ["First"]
        assert "Duplicate" in captured_logs[0]

    def test_accepts_validated_items(self):
        item = CatalogItem(id="1", name="Tee")
        assert load_catalog([item])[0] is item

    def test_empty_input(self):
        assert load_catalog([]) == []
        assert load_catalog(None) == []


class TestCategories:
    """Test category loading and resolution."""

    def test_load_categories_skips_invalid(self, captured_logs):
        categories = load_categories([
            {"slug": "hoodies", "name": "Hoodies"},
            {"slug": "broken"},
            CategorySchema(slug="tees", name="T-Shirts"),
        ])

        assert [c.slug for c in categories] == ["hoodies", "tees"]
        assert len(captured_logs) == 1

    def test_build_lookup_first_definition_wins(self):
        lookup = build_category_lookup([
            CategorySchema(slug="hoodies", name="Hoodies"),
            CategorySchema(slug="hoodies", name="Old Hoodies"),
        ])
        assert lookup == {"hoodies": "Hoodies"}

    def test_resolve_with_mapping(self, category_lookup):
        assert resolve_category_name(category_lookup, "polo-shirts") == "Polo Shirts"
        assert resolve_category_name(category_lookup, "unknown") is None

    def test_resolve_with_callable(self):
        assert resolve_category_name(str.title, "hoodies") == "Hoodies"
        assert resolve_category_name(lambda code: "", "hoodies") is None

    def test_resolve_without_resolver(self):
        assert resolve_category_name(None, "hoodies") is None
        assert resolve_category_name({"": "Empty"}, "") is None
