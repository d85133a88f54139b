"""
This module defines the options accepted by the related-item selector.
"""

from pydantic import BaseModel, Field


class RelatedSelectionOptions(BaseModel):
    """
    Constraints used to pick items related to a reference product.

    A non-positive priceRangePercent disables the price constraint rather than
    failing. The attribute affinity flags are off unless requested.
    """
    limit: int = Field(default=8, ge=0)
    includeSameCategory: bool = True
    includeSimilarPrice: bool = True
    priceRangePercent: float = 20
    includeCommonColors: bool = False
    includeCommonSizes: bool = False
    includeSameMaterial: bool = False
    includeSameBrand: bool = False
