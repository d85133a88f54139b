"""
Service functions for turning raw catalog records into validated snapshots
and resolving category display names.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger
from pydantic import ValidationError

from catalog_engine.catalog.schemas import CatalogItem, CategorySchema
from catalog_engine.common.logs import ensure_logging

CategoryResolver = Union[Mapping[str, str], Callable[[str], Optional[str]]]


def load_catalog(records: Iterable[Union[Dict[str, Any], CatalogItem]]) -> List[CatalogItem]:
    """
    Validate raw product records into a catalog snapshot.

    Invalid records are skipped with a warning instead of failing the whole
    snapshot, and when two records share an id the first one wins.

    Args:
        records: Product dictionaries (or already validated items) in catalog order

    Returns:
        List of CatalogItem objects in input order
    """
    ensure_logging()
    items: List[CatalogItem] = []
    seen_ids = set()

    for position, record in enumerate(records or []):
        # Skip invalid products
        if not record:
            logger.warning("Skipping empty catalog record at position {}", position)
            continue

        if isinstance(record, CatalogItem):
            item = record
        else:
            try:
                item = CatalogItem.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid catalog record at position {}: {} error(s)",
                    position,
                    e.error_count(),
                )
                continue

        if not item.id:
            logger.warning("Skipping catalog record without id at position {}", position)
            continue
        if item.id in seen_ids:
            logger.warning("Duplicate catalog id {!r} at position {}; keeping the first record", item.id, position)
            continue

        seen_ids.add(item.id)
        items.append(item)

    logger.debug("Loaded {} catalog items", len(items))
    return items


def load_categories(records: Iterable[Union[Dict[str, Any], CategorySchema]]) -> List[CategorySchema]:
    """Validate raw category records, skipping the ones that do not validate."""
    ensure_logging()
    categories: List[CategorySchema] = []
    for position, record in enumerate(records or []):
        if isinstance(record, CategorySchema):
            categories.append(record)
            continue
        try:
            categories.append(CategorySchema.model_validate(record))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid category record at position {}: {} error(s)",
                position,
                e.error_count(),
            )
    return categories


def build_category_lookup(categories: Iterable[CategorySchema]) -> Dict[str, str]:
    """
    Build a slug -> display name mapping usable as a category resolver.
    """
    lookup: Dict[str, str] = {}
    for category in categories or []:
        # First definition of a slug wins
        lookup.setdefault(category.slug, category.name)
    return lookup


def resolve_category_name(resolver: Optional[CategoryResolver], code: str) -> Optional[str]:
    """
    Resolve a category code to its display name.

    Args:
        resolver: A mapping of code to name, a callable, or None
        code: The category code of a catalog item

    Returns:
        The display name, or None when it cannot be resolved
    """
    if resolver is None or not code:
        return None
    if isinstance(resolver, Mapping):
        name = resolver.get(code)
    else:
        name = resolver(code)
    return name or None
