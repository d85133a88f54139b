"""
Text normalization and tiered string similarity used by the search engine.

Similarity is decided by the first tier that fires, in priority order:

    EXACT               identical after normalization          -> 1.0
    CONTAINMENT         one string contains the other           -> 0.8
    WORD_OVERLAP        some words contain each other           -> 0.5 .. 0.8
    CHARACTER_FALLBACK  positional character agreement          -> 0.0 .. 0.3
"""

import re
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

_NON_ALPHANUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")

EXACT_SCORE = 1.0
CONTAINMENT_SCORE = 0.8
WORD_OVERLAP_BASE = 0.5
WORD_OVERLAP_SPAN = 0.3
CHARACTER_FALLBACK_SPAN = 0.3


def normalize(text: Optional[str]) -> str:
    """
    Canonicalize text for comparison.

    Lowercases, drops everything that is not an ASCII letter, digit or
    whitespace, collapses whitespace runs to a single space and trims.

    Args:
        text: Any string (None is treated as empty)

    Returns:
        The normalized string, possibly empty
    """
    if not text:
        return ""
    text = _NON_ALPHANUM_RE.sub("", str(text).lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def words(normalized: str) -> List[str]:
    """Split an already normalized string into its words."""
    return normalized.split()


class MatchTier(str, Enum):
    EXACT = "exact"
    CONTAINMENT = "containment"
    WORD_OVERLAP = "word_overlap"
    CHARACTER_FALLBACK = "character_fallback"


class SimilarityMatch(NamedTuple):
    tier: MatchTier
    score: float


def exact_match(s1: str, s2: str) -> Optional[float]:
    # Two empty strings are equal too
    if s1 == s2:
        return EXACT_SCORE
    return None


def containment_match(s1: str, s2: str) -> Optional[float]:
    if not s1 or not s2:
        return None
    if s1 in s2 or s2 in s1:
        return CONTAINMENT_SCORE
    return None


def word_overlap_match(s1: str, s2: str) -> Optional[float]:
    words1 = words(s1)
    words2 = words(s2)
    if not words1 or not words2:
        return None

    matching = [w for w in words1 if any(w in w2 or w2 in w for w2 in words2)]
    if not matching:
        return None
    return WORD_OVERLAP_BASE + (len(matching) / max(len(words1), len(words2))) * WORD_OVERLAP_SPAN


def character_fallback_match(s1: str, s2: str) -> float:
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 0.0
    matches = sum(1 for c1, c2 in zip(s1, s2) if c1 == c2)
    return (matches / longest) * CHARACTER_FALLBACK_SPAN


_TIERS: Tuple[Tuple[MatchTier, Callable[[str, str], Optional[float]]], ...] = (
    (MatchTier.EXACT, exact_match),
    (MatchTier.CONTAINMENT, containment_match),
    (MatchTier.WORD_OVERLAP, word_overlap_match),
)


def match_similarity(a: Optional[str], b: Optional[str]) -> SimilarityMatch:
    """
    Compare two raw strings and report which tier decided the score.

    Both inputs are normalized here; callers pass raw text.
    """
    s1 = normalize(a)
    s2 = normalize(b)

    for tier, strategy in _TIERS:
        score = strategy(s1, s2)
        if score is not None:
            return SimilarityMatch(tier, score)

    return SimilarityMatch(MatchTier.CHARACTER_FALLBACK, character_fallback_match(s1, s2))


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Return a similarity score in [0, 1] between two raw strings."""
    return match_similarity(a, b).score
