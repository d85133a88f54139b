"""
This module contains pytest fixtures and configuration for testing.
"""
import sys
from pathlib import Path

import pytest

# Add the project's root directory to the system path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from catalog_engine.catalog.services import build_category_lookup, load_catalog, load_categories
from catalog_engine.common.config import SearchSettings
from catalog_engine.common.logs import reset_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """
    Put loguru back to its default stderr handler after each test.
    """
    yield
    reset_logging()


@pytest.fixture
def settings():
    """
    Default engine settings, independent of the test environment.
    """
    return SearchSettings()


@pytest.fixture
def sample_categories():
    """
    Storefront categories used by the catalog fixtures.
    """
    return load_categories([
        {"slug": "polo-shirts", "name": "Polo Shirts"},
        {"slug": "hoodies", "name": "Hoodies"},
        {"slug": "sweatshirts", "name": "Sweatshirts"},
        {"slug": "t-shirts", "name": "T-Shirts"},
        {"slug": "leggings", "name": "Leggings"},
    ])


@pytest.fixture
def category_lookup(sample_categories):
    return build_category_lookup(sample_categories)


@pytest.fixture
def sample_catalog():
    """
    A small catalog snapshot with realistic product records.
    """
    return load_catalog([
        {
            "id": "1",
            "name": "Organic Cotton Classic Tee",
            "slug": "organic-cotton-classic-tee",
            "description": "Ultra-soft organic cotton tee with a relaxed fit.",
            "price": 89,
            "compareAtPrice": 120,
            "category": "t-shirts",
            "sizes": ["XS", "S", "M", "L", "XL"],
            "colors": [
                {"name": "Black", "hex": "#000000"},
                {"name": "White", "hex": "#FFFFFF"},
                {"name": "Gray", "hex": "#9CA3AF"},
            ],
            "inStock": True,
            "isNew": True,
            "isBestSeller": True,
            "isOnSale": True,
            "material": "100% Organic Cotton",
            "brand": "NOWIHT",
            "tags": ["organic", "basics"],
            "createdAt": "2025-10-15T00:00:00.000Z",
        },
        {
            "id": "2",
            "name": "Premium Polo Shirt",
            "slug": "premium-polo-shirt",
            "description": "Classic polo shirt crafted from premium organic cotton.",
            "price": 99,
            "category": "polo-shirts",
            "sizes": ["S", "M", "L", "XL", "XXL"],
            "colors": [
                {"name": "Navy", "hex": "#1E3A8A"},
                {"name": "White", "hex": "#FFFFFF"},
                {"name": "Olive", "hex": "#6B7280"},
            ],
            "inStock": True,
            "isNew": True,
            "material": "100% Organic Cotton Pique",
            "brand": "NOWIHT BASICS",
            "createdAt": "2025-09-20T00:00:00.000Z",
        },
        {
            "id": "3",
            "name": "Cozy Organic Hoodie",
            "slug": "cozy-organic-hoodie",
            "description": "Supremely comfortable hoodie made from organic cotton fleece.",
            "price": 169,
            "compareAtPrice": 220,
            "category": "hoodies",
            "sizes": ["XS", "S", "M", "L", "XL"],
            "colors": [
                {"name": "Black", "hex": "#000000"},
                {"name": "Beige", "hex": "#D4C5B9"},
                {"name": "Forest", "hex": "#2D5016"},
            ],
            "inStock": True,
            "isBestSeller": True,
            "material": "Organic Cotton Fleece",
            "brand": "NOWIHT",
            "createdAt": "2025-08-10T00:00:00.000Z",
        },
        {
            "id": "4",
            "name": "Essential Sweatshirt",
            "slug": "essential-sweatshirt",
            "description": "Midweight crewneck sweatshirt for everyday layering.",
            "price": 139,
            "category": "sweatshirts",
            "sizes": ["S", "M", "L"],
            "colors": ["Gray", "Navy"],
            "inStock": False,
            "material": "Cotton Blend",
            "brand": "NOWIHT",
            "createdAt": "2025-07-01T00:00:00.000Z",
        },
        {
            "id": "5",
            "name": "Relaxed Zip Hoodie",
            "slug": "relaxed-zip-hoodie",
            "description": "Zip-up hoodie in brushed fleece.",
            "price": 179,
            "category": "hoodies",
            "sizes": ["M", "L", "XL"],
            "colors": ["Gray"],
            "inStock": True,
            "material": "Brushed Fleece",
            "brand": "NOWIHT",
        },
        {
            "id": "6",
            "name": "Performance Leggings",
            "slug": "performance-leggings",
            "description": "High-rise leggings with four-way stretch.",
            "price": 79,
            "category": "leggings",
            "sizes": ["XS", "S", "M", "L"],
            "colors": ["Black"],
            "inStock": True,
            "material": "Recycled Nylon",
            "brand": "NOWIHT SPORT",
            "createdAt": "2025-06-05T00:00:00.000Z",
        },
    ])
