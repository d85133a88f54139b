"""
This module defines the Pydantic models returned and accepted by the search
services.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_engine.catalog.schemas import CatalogItem
from catalog_engine.common.schemas import PaginationResponse


class ScoredResult(BaseModel):
    """
    A catalog item paired with its relevance to a query.
    """
    item: CatalogItem
    relevance: float = Field(ge=0)


class SortOption(str, Enum):
    """
    Orderings supported by the advanced search.
    """
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    NEWEST = "newest"


class SearchFilters(BaseModel):
    """
    Optional narrowing applied to ranked results. Unset fields do not filter.
    """
    categories: List[str] = []
    minPrice: Optional[float] = None
    maxPrice: Optional[float] = None
    colors: List[str] = []
    sizes: List[str] = []
    inStock: Optional[bool] = None


class SearchPage(PaginationResponse[ScoredResult]):
    """
    One page of advanced search results.
    """
    query: str = ""
    appliedFilters: Optional[SearchFilters] = None
