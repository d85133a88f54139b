"""
Configuration for the catalog search engine.

Values are read from the environment (optionally populated from a .env file)
and grouped into immutable settings models so scoring code never relies on
magic numbers.
"""

import os
from functools import lru_cache
from typing import List, Optional

import pytz
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

DEFAULT_POPULAR_SEARCHES = [
    "Tracksuits",
    "Hoodies",
    "T-Shirts",
    "Polo Shirts",
    "Sweatshirts",
    "Pajama Sets",
    "Sports Bras",
    "Leggings",
]

# Result limits (can be overridden per call)
DEFAULT_SEARCH_LIMIT = 20
DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_RELATED_LIMIT = 8
# Items scoring at or below this are noise, not results
DEFAULT_MIN_RELEVANCE = 1.0
MIN_QUERY_LENGTH = 2

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for {}: {!r}. Using default {}.", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid number for {}: {!r}. Using default {}.", name, raw, default)
        return default


def log_level_from_env() -> str:
    level = os.environ.get("CATALOG_LOG_LEVEL", "").strip().upper()
    if not level:
        return DEFAULT_LOG_LEVEL
    if level not in LOG_LEVELS:
        logger.warning("Unknown log level {!r}. Using {}.", level, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


class RelevanceWeights(BaseModel):
    """
    Field weights used by the relevance ranker.

    Each full-string similarity (0-1) is multiplied by its field weight; the
    word-level bonuses are flat amounts added per query word found in a field.
    """
    model_config = ConfigDict(frozen=True)

    name: float = 10
    category: float = 8
    categoryName: float = 8
    description: float = 5
    tag: float = 3
    tagThreshold: float = 0.5
    wordInName: float = 2
    wordInCategory: float = 2
    wordInDescription: float = 1
    minWordLength: int = 3


class RelatedWeights(BaseModel):
    """
    Weights used when selecting related items for a reference product.
    """
    model_config = ConfigDict(frozen=True)

    sameCategory: float = 40
    similarPrice: float = 25
    colorMatch: float = 5
    colorCap: float = 15
    sizeMatch: float = 2
    sizeCap: float = 10
    material: float = 5
    brand: float = 3


class SearchSettings(BaseModel):
    """
    Static configuration shared by every engine entry point.
    """
    model_config = ConfigDict(frozen=True)

    weights: RelevanceWeights = Field(default_factory=RelevanceWeights)
    relatedWeights: RelatedWeights = Field(default_factory=RelatedWeights)
    minQueryLength: int = MIN_QUERY_LENGTH
    minRelevance: float = DEFAULT_MIN_RELEVANCE
    searchLimit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=0)
    suggestionLimit: int = Field(default=DEFAULT_SUGGESTION_LIMIT, ge=0)
    relatedLimit: int = Field(default=DEFAULT_RELATED_LIMIT, ge=0)
    popularTerms: List[str] = Field(default_factory=lambda: list(DEFAULT_POPULAR_SEARCHES))
    timezone: str = DEFAULT_TIMEZONE
    logLevel: str = DEFAULT_LOG_LEVEL


def settings_from_env() -> SearchSettings:
    """
    Build a fresh SearchSettings from environment variables.

    Unparseable numbers fall back to their defaults with a warning, and an
    unknown timezone name falls back to UTC.
    """
    timezone = os.environ.get("CATALOG_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE
    if timezone not in pytz.all_timezones_set:
        logger.warning("Unknown timezone {!r}. Using {}.", timezone, DEFAULT_TIMEZONE)
        timezone = DEFAULT_TIMEZONE

    return SearchSettings(
        minRelevance=_env_float("CATALOG_MIN_RELEVANCE", DEFAULT_MIN_RELEVANCE),
        searchLimit=max(0, _env_int("CATALOG_SEARCH_LIMIT", DEFAULT_SEARCH_LIMIT)),
        suggestionLimit=max(0, _env_int("CATALOG_SUGGESTION_LIMIT", DEFAULT_SUGGESTION_LIMIT)),
        relatedLimit=max(0, _env_int("CATALOG_RELATED_LIMIT", DEFAULT_RELATED_LIMIT)),
        popularTerms=_env_list("CATALOG_POPULAR_SEARCHES", DEFAULT_POPULAR_SEARCHES),
        timezone=timezone,
        logLevel=log_level_from_env(),
    )


@lru_cache(maxsize=1)
def load_settings() -> SearchSettings:
    """Return the process-wide default settings (read once from the environment)."""
    return settings_from_env()


def resolve_settings(settings: Optional[SearchSettings] = None) -> SearchSettings:
    return settings if settings is not None else load_settings()


def get_timezone(settings: Optional[SearchSettings] = None):
    """Return the pytz timezone used to localize naive timestamps."""
    return pytz.timezone(resolve_settings(settings).timezone)
