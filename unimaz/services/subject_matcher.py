"""
Match policy for comparison keys of subject names.

Containment is a permissive heuristic: "matematik" contains-matches
"matematika". Mapping table curation is the primary correctness mechanism;
the min_length gate only keeps very short names from matching everything.
"""

import logging
from typing import Callable, Iterable, Optional

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)


def contains_either_way(a: str, b: str, min_length: int = 0) -> bool:
    """True if one key contains the other.

    The shorter side must be at least ``min_length`` characters; the empty
    string never matches.
    """
    if not a or not b:
        return False
    if min(len(a), len(b)) < min_length:
        return False
    return a in b or b in a


def keys_match(a: str, b: str, min_length: int = 0) -> bool:
    """Equal, or related by containment."""
    if not a or not b:
        return False
    return a == b or contains_either_way(a, b, min_length)


def similarity(a: str, b: str) -> float:
    """(longer - edit distance) / longer, as a percentage in [0, 100]."""
    if not a and not b:
        return 100.0
    return Levenshtein.normalized_similarity(a, b) * 100


def find_best_match(
    query_key: str,
    candidates: Iterable[str],
    key: Callable[[str], str],
    min_length: int = 0,
    threshold: Optional[float] = None,
) -> Optional[str]:
    """
    Pick the candidate whose ``key(candidate)`` best matches ``query_key``.

    Exact key equality wins immediately, then the first containment match.
    When ``threshold`` is given, the most similar candidate scoring at least
    ``threshold`` is returned as a last resort.
    """
    if not query_key:
        return None

    keyed = [(candidate, key(candidate)) for candidate in candidates]

    for candidate, candidate_key in keyed:
        if candidate_key == query_key:
            return candidate

    for candidate, candidate_key in keyed:
        if contains_either_way(query_key, candidate_key, min_length):
            return candidate

    if threshold is None:
        return None

    best_match: Optional[str] = None
    best_score = 0.0
    for candidate, candidate_key in keyed:
        score = similarity(query_key, candidate_key)
        if score >= threshold and score > best_score:
            best_match = candidate
            best_score = score

    if best_match is not None:
        logger.debug(
            "Similarity match for '%s' -> '%s' (score: %.1f)", query_key, best_match, best_score
        )
    return best_match
