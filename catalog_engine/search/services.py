"""
Service functions for searching a catalog snapshot: relevance ranking,
autocomplete suggestions, popular terms and filtered/sorted/paginated search.

Every function works on the caller's snapshot only and returns fresh lists,
so they are safe to call concurrently.
"""

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from catalog_engine.catalog.schemas import CatalogItem
from catalog_engine.catalog.services import CategoryResolver, resolve_category_name
from catalog_engine.common.config import RelevanceWeights, SearchSettings, resolve_settings
from catalog_engine.common.logs import ensure_logging
from catalog_engine.common.text import normalize, similarity, words
from catalog_engine.search.schemas import ScoredResult, SearchFilters, SearchPage, SortOption


def score_item(
    item: CatalogItem,
    query: str,
    query_words: Sequence[str],
    categories: Optional[CategoryResolver] = None,
    weights: Optional[RelevanceWeights] = None,
) -> float:
    """
    Compute the weighted relevance of a single catalog item.

    Args:
        item: The catalog item to score
        query: Raw query text (normalized inside the similarity checks)
        query_words: Words of the normalized query
        categories: Resolver for the item's category display name
        weights: Field weights; defaults to RelevanceWeights()

    Returns:
        A non-negative relevance score
    """
    if weights is None:
        weights = RelevanceWeights()

    relevance = 0.0

    # Full-string similarity per field, name first
    relevance += similarity(item.name, query) * weights.name
    relevance += similarity(item.category, query) * weights.category

    # Display name of the category, e.g. "polo" -> "Polo Shirts"
    category_name = resolve_category_name(categories, item.category)
    if category_name:
        relevance += similarity(category_name, query) * weights.categoryName

    relevance += similarity(item.description, query) * weights.description

    if item.tags:
        tag_matches = [tag for tag in item.tags if similarity(tag, query) > weights.tagThreshold]
        relevance += len(tag_matches) * weights.tag

    # Word-by-word matching for multi-word queries like "polo shirts"
    name = normalize(item.name)
    category = normalize(item.category)
    description = normalize(item.description)
    for word in query_words:
        if len(word) < weights.minWordLength:
            continue
        if word in name:
            relevance += weights.wordInName
        if word in category:
            relevance += weights.wordInCategory
        if word in description:
            relevance += weights.wordInDescription

    return max(relevance, 0.0)


def _rank(
    query: str,
    catalog: Iterable[CatalogItem],
    categories: Optional[CategoryResolver],
    settings: SearchSettings,
) -> List[ScoredResult]:
    normalized_query = normalize(query)
    if len(normalized_query) < settings.minQueryLength:
        return []

    query_words = words(normalized_query)
    results = []
    for item in catalog or []:
        relevance = score_item(item, query, query_words, categories, settings.weights)
        if relevance > settings.minRelevance:
            results.append(ScoredResult(item=item, relevance=relevance))

    # sorted() is stable, so equal scores keep catalog order
    return sorted(results, key=lambda r: r.relevance, reverse=True)


def search(
    query: str,
    catalog: Iterable[CatalogItem],
    limit: Optional[int] = None,
    *,
    categories: Optional[CategoryResolver] = None,
    settings: Optional[SearchSettings] = None,
) -> List[ScoredResult]:
    """
    Rank a catalog snapshot by relevance to a free-text query.

    Name matches weigh most, then category code and category display name,
    then description and tags, plus a bonus for every query word found in a
    field. Items at or below the minimum relevance are dropped.

    Args:
        query: Raw search text
        catalog: Catalog snapshot in its natural order
        limit: Maximum number of results (default from settings, 20)
        categories: Category resolver (mapping or callable) for display names
        settings: Engine settings; defaults to the environment settings

    Returns:
        ScoredResult list sorted by relevance (highest first); empty when the
        query is too short or nothing matches
    """
    ensure_logging()
    settings = resolve_settings(settings)
    if limit is None:
        limit = settings.searchLimit

    results = _rank(query, catalog, categories, settings)
    logger.debug("Search {!r}: {} result(s) above threshold", query, len(results))
    return results[:max(0, limit)]


def suggest(
    query: str,
    catalog: Iterable[CatalogItem],
    category_names: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
    *,
    settings: Optional[SearchSettings] = None,
) -> List[str]:
    """
    Autocomplete suggestions: product and category names containing the query.

    Product names come first, then category names, each in input order;
    duplicates are dropped on the literal text.
    """
    settings = resolve_settings(settings)
    if limit is None:
        limit = settings.suggestionLimit

    normalized_query = normalize(query)
    if len(normalized_query) < settings.minQueryLength:
        return []

    # dict keeps first-seen order
    suggestions = {}
    for item in catalog or []:
        if normalized_query in normalize(item.name):
            suggestions.setdefault(item.name, None)
    for category_name in category_names or []:
        if normalized_query in normalize(category_name):
            suggestions.setdefault(category_name, None)

    return list(suggestions)[:max(0, limit)]


def popular_terms(settings: Optional[SearchSettings] = None) -> List[str]:
    """Return the configured popular search terms."""
    return list(resolve_settings(settings).popularTerms)


def apply_filters(results: Iterable[ScoredResult], filters: Optional[SearchFilters]) -> List[ScoredResult]:
    """
    Narrow ranked results by category, price range, color, size and stock.
    Order is preserved.
    """
    results = list(results)
    if filters is None:
        return results

    if filters.categories:
        wanted = set(filters.categories)
        results = [r for r in results if r.item.category in wanted]

    # A price bound of 0 means "not set"
    if filters.minPrice:
        results = [r for r in results if r.item.price >= filters.minPrice]
    if filters.maxPrice:
        results = [r for r in results if r.item.price <= filters.maxPrice]

    if filters.colors:
        wanted_colors = {color.lower() for color in filters.colors}
        results = [
            r for r in results
            if any(color.name.lower() in wanted_colors for color in r.item.colors)
        ]

    if filters.sizes:
        wanted_sizes = set(filters.sizes)
        results = [r for r in results if any(size in wanted_sizes for size in r.item.sizes)]

    if filters.inStock is not None:
        results = [r for r in results if r.item.inStock == filters.inStock]

    return results


def sort_results(results: Iterable[ScoredResult], sort: Optional[SortOption]) -> List[ScoredResult]:
    """
    Reorder results. Without a sort option the relevance order is kept.
    """
    results = list(results)
    if sort is None:
        return results

    sort = SortOption(sort)
    if sort == SortOption.PRICE_ASC:
        return sorted(results, key=lambda r: r.item.price)
    if sort == SortOption.PRICE_DESC:
        return sorted(results, key=lambda r: r.item.price, reverse=True)
    if sort == SortOption.NAME_ASC:
        return sorted(results, key=lambda r: r.item.name.casefold())
    if sort == SortOption.NAME_DESC:
        return sorted(results, key=lambda r: r.item.name.casefold(), reverse=True)

    # Newest first; undated items go last
    dated = [r for r in results if r.item.createdAt is not None]
    undated = [r for r in results if r.item.createdAt is None]
    return sorted(dated, key=lambda r: r.item.createdAt, reverse=True) + undated


def advanced_search(
    query: str,
    catalog: Iterable[CatalogItem],
    filters: Optional[SearchFilters] = None,
    sort: Optional[SortOption] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    *,
    categories: Optional[CategoryResolver] = None,
    settings: Optional[SearchSettings] = None,
) -> SearchPage:
    """
    Search with filters, sorting and offset pagination.

    All items above the relevance threshold are ranked first, then filtered,
    optionally re-sorted and finally sliced into a page.

    Args:
        query: Raw search text
        catalog: Catalog snapshot
        filters: Optional SearchFilters
        sort: Optional SortOption (or its string value)
        limit: Page size (default from settings, 20)
        offset: Number of results to skip
        categories: Category resolver for display names
        settings: Engine settings

    Returns:
        SearchPage with the page items and pagination info
    """
    ensure_logging()
    settings = resolve_settings(settings)
    if limit is None:
        limit = settings.searchLimit
    limit = max(0, limit)
    offset = max(0, offset)

    results = _rank(query, catalog, categories, settings)
    results = apply_filters(results, filters)
    results = sort_results(results, sort)

    total = len(results)
    page = results[offset:offset + limit]
    logger.debug("Advanced search {!r}: {} of {} result(s) at offset {}", query, len(page), total, offset)

    return SearchPage(
        items=page,
        total=total,
        limit=limit,
        offset=offset,
        hasMore=offset + limit < total,
        query=query.strip() if query else "",
        appliedFilters=filters,
    )
