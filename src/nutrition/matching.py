"""Lexical matching of ingredient names against USDA food descriptions."""
import re
from typing import Any, Dict, List, Sequence, Set, Tuple

from src.data_layer.models import Confidence

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")

HIGH_CONFIDENCE_THRESHOLD = 0.6
MEDIUM_CONFIDENCE_THRESHOLD = 0.35


def tokenize(text: str) -> Set[str]:
    """Lowercase *text* and split it on non-alphanumeric runs."""
    return {token for token in _TOKEN_SPLIT.split((text or "").lower()) if token}


def jaccard_similarity(a: str, b: str) -> float:
    """Token-set Jaccard similarity of two strings (0.0-1.0).

    Returns 0.0 when either string has no tokens.
    """
    ta = tokenize(a)
    tb = tokenize(b)
    if not ta or not tb:
        return 0.0
    return len(ta & tb) / len(ta | tb)


def rank_matches(query: str, foods: Sequence[Dict[str, Any]]) -> List[Tuple[Dict[str, Any], float]]:
    """Rank search results by description similarity to *query*, best first.

    Ties keep the search service's order.
    """
    scored = [(food, jaccard_similarity(query, food.get("description", "") or "")) for food in foods]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def confidence_for_score(score: float) -> Confidence:
    if score > HIGH_CONFIDENCE_THRESHOLD:
        return Confidence.HIGH
    if score > MEDIUM_CONFIDENCE_THRESHOLD:
        return Confidence.MEDIUM
    return Confidence.LOW
