"""
Service functions for selecting products related to a reference product.

Selection is driven by category and price constraints only; no text
similarity is involved.
"""

import math
from typing import Iterable, List, Optional

from loguru import logger

from catalog_engine.catalog.schemas import CatalogItem
from catalog_engine.common.config import RelatedWeights, SearchSettings, resolve_settings
from catalog_engine.common.logs import ensure_logging
from catalog_engine.related.schemas import RelatedSelectionOptions

# Price proximity keeps at least this share of the price weight at the band edge
PRICE_EDGE_FACTOR = 0.5
YOU_MAY_ALSO_LIKE_PRICE_RANGE = 30


def _price_delta(reference_price: float, candidate_price: float, band: float) -> Optional[float]:
    """
    Relative price distance, or None when the candidate lies outside the band.

    The band is inclusive: prices that land on the edge after float rounding
    (50.50 vs 60.60 at 20%) still count as inside.
    """
    delta = abs(candidate_price - reference_price) / reference_price
    if delta > band and not math.isclose(delta, band):
        return None
    return min(delta, band)


def price_score(reference_price: float, candidate_price: float, range_percent: float, weight: float) -> float:
    """
    Score how close a candidate's price is to the reference price.

    Inside the ±range_percent band the score falls linearly from the full
    weight at an identical price to half the weight at the band edge; outside
    the band it is 0. This linear falloff stands in for a weight inversely
    proportional to the price delta, which would be unbounded at an identical
    price and could outweigh the category match. A zero reference price or a
    non-positive range disables the term.
    """
    if reference_price <= 0 or range_percent <= 0:
        return 0.0

    band = range_percent / 100
    delta = _price_delta(reference_price, candidate_price, band)
    if delta is None:
        return 0.0
    return weight * (1 - PRICE_EDGE_FACTOR * delta / band)


def _color_names(item: CatalogItem) -> List[str]:
    return [color.name.lower() for color in item.colors if color.name]


def affinity_score(
    reference: CatalogItem,
    candidate: CatalogItem,
    options: RelatedSelectionOptions,
    weights: RelatedWeights,
) -> float:
    """
    Score the opt-in attribute affinities: shared colors, sizes, material and brand.
    """
    score = 0.0

    if options.includeCommonColors:
        reference_colors = set(_color_names(reference))
        common = [c for c in _color_names(candidate) if c in reference_colors]
        if common:
            score += min(weights.colorCap, len(common) * weights.colorMatch)

    if options.includeCommonSizes:
        reference_sizes = set(reference.sizes)
        common = [s for s in candidate.sizes if s in reference_sizes]
        if common:
            score += min(weights.sizeCap, len(common) * weights.sizeMatch)

    if options.includeSameMaterial and reference.material and candidate.material:
        reference_material = reference.material.lower()
        candidate_material = candidate.material.lower()
        if reference_material in candidate_material or candidate_material in reference_material:
            score += weights.material

    if options.includeSameBrand and reference.brand and reference.brand == candidate.brand:
        score += weights.brand

    return score


def relatedness_score(
    reference: CatalogItem,
    candidate: CatalogItem,
    options: RelatedSelectionOptions,
    weights: Optional[RelatedWeights] = None,
) -> float:
    """
    Combined score of a candidate against the reference under the given options.
    """
    if weights is None:
        weights = RelatedWeights()

    score = 0.0
    if options.includeSameCategory and candidate.category == reference.category:
        score += weights.sameCategory

    if options.includeSimilarPrice:
        score += price_score(reference.price, candidate.price, options.priceRangePercent, weights.similarPrice)

    score += affinity_score(reference, candidate, options, weights)
    return score


def related_items(
    reference: Optional[CatalogItem],
    catalog: Iterable[CatalogItem],
    options: Optional[RelatedSelectionOptions] = None,
    *,
    settings: Optional[SearchSettings] = None,
) -> List[CatalogItem]:
    """
    Select items related to a reference product.

    Args:
        reference: The product being viewed
        catalog: Catalog snapshot
        options: Selection constraints; defaults use the configured related limit
        settings: Engine settings (weights and default limit)

    Returns:
        Items ordered by relatedness (ties keep catalog order), never including
        the reference itself or items that satisfy no enabled constraint
    """
    ensure_logging()
    settings = resolve_settings(settings)
    if options is None:
        options = RelatedSelectionOptions(limit=settings.relatedLimit)
    if reference is None:
        return []

    scored = []
    for candidate in catalog or []:
        if candidate.id == reference.id:
            continue
        score = relatedness_score(reference, candidate, options, settings.relatedWeights)
        if score > 0:
            scored.append((score, candidate))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    logger.debug("Related items for {!r}: {} candidate(s)", reference.id, len(scored))
    return [candidate for _, candidate in scored[:options.limit]]


def related_by_category(
    reference: Optional[CatalogItem],
    catalog: Iterable[CatalogItem],
    limit: int = 4,
) -> List[CatalogItem]:
    """In-stock items from the reference's category, in catalog order."""
    if reference is None:
        return []
    matches = [
        item for item in catalog or []
        if item.id != reference.id and item.category == reference.category and item.inStock
    ]
    return matches[:max(0, limit)]


def you_may_also_like(
    reference: Optional[CatalogItem],
    catalog: Iterable[CatalogItem],
    limit: int = 4,
    price_range_percent: float = YOU_MAY_ALSO_LIKE_PRICE_RANGE,
) -> List[CatalogItem]:
    """
    In-stock items from other categories priced within ±price_range_percent of
    the reference, in catalog order.
    """
    if reference is None or reference.price <= 0 or price_range_percent <= 0:
        return []

    band = price_range_percent / 100
    matches = [
        item for item in catalog or []
        if item.id != reference.id
        and item.category != reference.category
        and _price_delta(reference.price, item.price, band) is not None
        and item.inStock
    ]
    return matches[:max(0, limit)]
