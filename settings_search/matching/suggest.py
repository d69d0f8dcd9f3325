"""
suggest.py

Completion suggestions for a partially typed search term, drawn from the
index vocabulary.
"""

from typing import List, Tuple
from rapidfuzz.distance import Levenshtein

from .datastore import TFIDFIndex
from . import config


def _suggestion_score(partial: str, term: str) -> float:
    if term.startswith(partial):
        return 1.0 - (len(term) - len(partial)) * 0.01
    pos = term.find(partial)
    if pos != -1:
        return 0.5 - pos * 0.01
    if len(partial) >= config.SUGGESTION_FUZZY_MIN_PARTIAL:
        distance = Levenshtein.distance(partial, term[:len(partial) + 2])
        if distance <= config.SUGGESTION_MAX_DISTANCE:
            return 0.3 - distance * 0.1
    return 0.0


def get_search_suggestions(partial: str, index: TFIDFIndex, limit: int = config.SUGGESTION_LIMIT) -> List[str]:
    """
    Rank vocabulary terms against a typed prefix: prefix matches first,
    then terms containing it, then near-misses. Distinctive terms (higher
    IDF, capped) are favoured.
    """
    if not partial or len(partial) < config.SUGGESTION_MIN_PARTIAL:
        return []

    partial_lower = partial.lower()
    scored: List[Tuple[str, float]] = []
    for term in index.vocabulary():
        score = _suggestion_score(partial_lower, term)
        if score > 0:
            score *= min(index.idf.get(term, 1.0), config.SUGGESTION_MAX_IDF_BOOST)
            scored.append((term, score))

    scored.sort(key=lambda s: s[1], reverse=True)
    return [term for term, _ in scored[:max(0, limit)]]
