"""
This module defines the Pydantic models for catalog snapshots.
These are read-only views of the products and categories supplied by the
storage layer; the engine never writes them back.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from catalog_engine.common.schemas import TimestampMixin


class ProductColor(BaseModel):
    """
    A named product color with an optional hex swatch.
    """
    name: str
    hex: str = ""


class CategorySchema(BaseModel):
    """
    Represents a product category with its display metadata.
    """
    slug: str
    name: str
    description: str = ""


class CatalogItem(TimestampMixin):
    """
    A product as seen by the search and recommendation engine.

    Only name, category, description, tags and price take part in scoring.
    The remaining fields are passed through to callers or used by filters.
    """
    id: str
    name: str
    slug: str = ""
    category: str = ""
    description: str = ""
    tags: Optional[List[str]] = None
    price: float = Field(default=0, ge=0)
    compareAtPrice: Optional[float] = None
    images: List[str] = []
    sizes: List[str] = []
    colors: List[ProductColor] = []
    material: str = ""
    brand: Optional[str] = None
    inStock: bool = Field(default=True, validation_alias=AliasChoices("inStock", "in_stock"))
    stock: Optional[int] = None
    isNew: bool = False
    isBestSeller: bool = False
    isOnSale: bool = False

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, value):
        """Numeric ids from spreadsheets or SQL rows are accepted as strings"""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('description', 'material', 'slug', 'category', mode='before')
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, value):
        """Accept a list, a comma-separated string or nothing at all"""
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple, set)):
            return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]
        return value

    @field_validator('colors', mode='before')
    @classmethod
    def validate_colors(cls, value):
        """Bare color names become ProductColor entries; nameless colors are dropped"""
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            return value
        colors = []
        for color in value:
            if isinstance(color, str):
                if color.strip():
                    colors.append({"name": color.strip()})
            elif isinstance(color, dict):
                if color.get("name"):
                    colors.append(color)
            elif isinstance(color, ProductColor):
                colors.append(color)
        return colors

    @field_validator('sizes', 'images', mode='before')
    @classmethod
    def none_to_list(cls, value):
        return [] if value is None else value
