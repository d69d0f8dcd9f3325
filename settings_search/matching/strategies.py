"""
strategies.py

The three interchangeable match strategies. Each takes (query, text) and
returns a MatchResult with a score in [0, 1] and highlight spans into text.
Matching is case-insensitive.

- contiguous_match: literal occurrences of the whole query, else its longest prefix
- fuzzy_match: query characters in order, rewarding tight and early runs
- word_based_match: per query word, substring or edit-distance match
"""

from typing import Callable, Dict, List
from rapidfuzz.distance import OSA

from .highlight import merge_highlights
from .models import HighlightSpan, MatchResult, NO_MATCH
from .preprocess import fold_case, split_words
from . import config

MatchFunction = Callable[[str, str], MatchResult]


def edit_distance(a: str, b: str) -> int:
    """
    Edit distance with unit cost for insertion, deletion and substitution.
    An adjacent transposition also counts as one edit, so 'braek' is one
    edit away from 'break'.
    """
    return OSA.distance(a, b)


def contiguous_match(query: str, text: str) -> MatchResult:
    query_lower = fold_case(query)
    text_lower = fold_case(text)
    if not query_lower or not text_lower:
        return NO_MATCH

    highlights: List[HighlightSpan] = []
    total_len = 0
    pos = text_lower.find(query_lower)
    while pos != -1:
        highlights.append(HighlightSpan(pos, pos + len(query_lower)))
        total_len += len(query_lower)
        pos = text_lower.find(query_lower, pos + 1)

    if not highlights:
        # longest prefix of the query found anywhere, down to a few characters
        shortest = min(config.CONTIGUOUS_MIN_PREFIX, len(query_lower))
        for length in range(len(query_lower), shortest - 1, -1):
            pos = text_lower.find(query_lower[:length])
            if pos != -1:
                score = (length / len(query_lower)) * config.PARTIAL_PREFIX_PENALTY
                return MatchResult(score, [HighlightSpan(pos, pos + length)])
        return NO_MATCH

    position_bonus = 1 - (highlights[0].start / len(text_lower)) * config.CONTIGUOUS_POSITION_PENALTY
    score = min(1.0, (total_len / len(text_lower)) * 2) * position_bonus
    return MatchResult(score, merge_highlights(highlights))


def fuzzy_match(query: str, text: str) -> MatchResult:
    query_lower = fold_case(query)
    text_lower = fold_case(text)
    if not query_lower or not text_lower:
        return NO_MATCH

    runs: List[List[int]] = []  # [start, end) of each run of adjacent matches
    run_length = 0
    run_bonus = 0.0
    last_match = -2
    qi = 0
    for ti, ch in enumerate(text_lower):
        if qi == len(query_lower):
            break
        if ch != query_lower[qi]:
            continue
        if ti == last_match + 1:
            run_length += 1
            run_bonus += run_length * config.FUZZY_RUN_BONUS_STEP
            runs[-1][1] = ti + 1
        else:
            run_length = 1
            runs.append([ti, ti + 1])
        last_match = ti
        qi += 1

    if qi < len(query_lower):
        return NO_MATCH

    span = runs[-1][1] - runs[0][0]
    compactness = len(query_lower) / max(span, len(query_lower))
    position_bonus = 1 - (runs[0][0] / len(text_lower)) * config.FUZZY_POSITION_PENALTY

    score = (
        compactness * config.FUZZY_COMPACTNESS_WEIGHT
        + min(run_bonus, config.FUZZY_MAX_RUN_BONUS)
        + position_bonus * config.FUZZY_POSITION_WEIGHT
    )
    score = max(0.0, min(1.0, score))
    return MatchResult(score, merge_highlights([HighlightSpan(s, e) for s, e in runs]))


def word_based_match(query: str, text: str) -> MatchResult:
    """
    Score each query word on its own: an exact substring scores 1.0, else the
    most similar word of the text (1 - distance / longer length) if that
    similarity is above the threshold.

    score = average word score * fraction of words matched, so one lucky
    word in a long query does not rank high.
    """
    query_words = fold_case(query).split()
    if not query_words:
        return NO_MATCH
    text_lower = fold_case(text)

    highlights: List[HighlightSpan] = []
    total = 0.0
    matched = 0
    for word in query_words:
        best = 0.0
        best_span = None

        pos = text_lower.find(word)
        if pos != -1:
            best = 1.0
            best_span = HighlightSpan(pos, pos + len(word))
        else:
            cursor = 0
            for text_word in split_words(text_lower):
                if not text_word:
                    continue
                start = text_lower.find(text_word, cursor)
                if start == -1:
                    continue
                cursor = start + len(text_word)
                similarity = 1 - edit_distance(word, text_word) / max(len(word), len(text_word))
                if similarity > best and similarity > config.WORD_SIMILARITY_THRESHOLD:
                    best = similarity
                    best_span = HighlightSpan(start, cursor)

        if best > 0:
            matched += 1
            total += best
            highlights.append(best_span)

    n = len(query_words)
    score = (total / n) * (matched / n)
    return MatchResult(score, merge_highlights(highlights))


_STRATEGIES: Dict[str, MatchFunction] = {
    "fuzzy": fuzzy_match,
    "contiguous": contiguous_match,
    "word": word_based_match,
}


def get_match_function(mode: str) -> MatchFunction:
    """Strategy for a match mode; anything unrecognized falls back to fuzzy."""
    return _STRATEGIES.get(mode, fuzzy_match)
