"""
matcher.py

Ranks settings against a free-text query.

Each candidate is scored from two signals:
- TF-IDF similarity between the query and the setting's combined text
- a match strategy (fuzzy, contiguous or word) run on five fields: id, title,
  description, the best enum value and the best tag

combined = tfidf * 0.3 + id * boost_id + title * boost_title
           + description * boost_description + enum * 1.2 + tag * 1.3

The combined score is a relative ranking signal, not a percentage.
"""

from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple
import logging

from .datastore import TFIDFIndex, build_search_index
from .filters import apply_filters, parse_search_filters
from .highlight import merge_highlights
from .models import (
    FilterContext,
    FilteredSearch,
    HighlightSpan,
    MatchResult,
    NO_MATCH,
    SearchOptions,
    SearchableSetting,
    SettingSearchResult,
)
from .preprocess import compute_tf, tokenize
from .strategies import MatchFunction, get_match_function
from . import config

logger = logging.getLogger(__name__)


class _FieldScore(NamedTuple):
    match_type: str
    boosted: float
    match: MatchResult
    field: str


def tfidf_similarity(query_tf: Mapping[str, float], doc_tf: Mapping[str, float], idf: Mapping[str, float]) -> float:
    score = 0.0
    for term, qtf in query_tf.items():
        dtf = doc_tf.get(term)
        if dtf:
            score += qtf * dtf * idf.get(term, 1.0)
    return score


def _best_of(match_fn: MatchFunction, query: str, values: Optional[Sequence[str]]) -> Tuple[MatchResult, str]:
    """Best-scoring value of a list field; the first one wins ties."""
    best, best_value = NO_MATCH, ""
    for value in values or []:
        m = match_fn(query, value)
        if m.score > best.score:
            best, best_value = m, value
    return best, best_value


def _tagged(spans: List[HighlightSpan], field: str) -> List[HighlightSpan]:
    return [span._replace(field=field) for span in spans]


def score_setting(
    query: str,
    query_tf: Mapping[str, float],
    setting: SearchableSetting,
    doc_tf: Mapping[str, float],
    index: TFIDFIndex,
    match_fn: MatchFunction,
    options: SearchOptions,
) -> Optional[SettingSearchResult]:
    """Score one candidate; None when it falls below options.min_score."""
    tfidf = tfidf_similarity(query_tf, doc_tf, index.idf)

    id_match = match_fn(query, setting.id)
    title_match = match_fn(query, setting.title)
    desc_match = match_fn(query, setting.description)
    enum_match, enum_value = _best_of(match_fn, query, setting.enum_values)
    tag_match, tag_value = _best_of(match_fn, query, setting.tags)

    fields = [
        _FieldScore("id", id_match.score * options.boost_id, id_match, "id"),
        _FieldScore("title", title_match.score * options.boost_title, title_match, "title"),
        _FieldScore("description", desc_match.score * options.boost_description, desc_match, "description"),
        _FieldScore("enum", enum_match.score * config.ENUM_WEIGHT, enum_match, f"enum:{enum_value}"),
        _FieldScore("tag", tag_match.score * config.TAG_WEIGHT, tag_match, f"tag:{tag_value}"),
    ]
    combined = tfidf * config.TFIDF_WEIGHT + sum(f.boosted for f in fields)
    if combined < options.min_score:
        return None

    # stable sort: on equal scores the earlier field wins
    ranked = sorted(fields, key=lambda f: f.boosted, reverse=True)
    match_type = "description"
    by_field: Dict[str, List[HighlightSpan]] = {}
    if ranked[0].boosted > 0:
        match_type = ranked[0].match_type
        by_field[ranked[0].field] = list(ranked[0].match.highlights)
    for other in ranked[1:]:
        if other.boosted > options.min_score:
            by_field.setdefault(other.field, []).extend(other.match.highlights)

    highlights: List[HighlightSpan] = []
    for field, spans in by_field.items():
        highlights.extend(_tagged(merge_highlights(spans), field))

    return SettingSearchResult(
        setting_id=setting.id,
        score=combined,
        match_type=match_type,
        highlights=highlights,
    )


def search_settings(
    query: str,
    index: TFIDFIndex,
    settings: Sequence[SearchableSetting],
    options: Optional[SearchOptions] = None,
) -> List[SettingSearchResult]:
    """
    Rank the indexed settings against query, best first.

    Only settings present in both the index and `settings` are considered,
    so passing a filtered list narrows the search without a rebuild.
    """
    if not query or not query.strip():
        return []
    options = options or SearchOptions()

    query_tf = compute_tf(tokenize(query))
    match_fn = get_match_function(options.match_mode)
    settings_map = {s.id: s for s in settings}

    results: List[SettingSearchResult] = []
    for setting_id, doc_tf in index.documents.items():
        setting = settings_map.get(setting_id)
        if setting is None:
            continue
        result = score_setting(query, query_tf, setting, doc_tf, index, match_fn, options)
        if result is not None:
            results.append(result)

    results.sort(key=lambda r: r.score, reverse=True)
    logger.debug("Search %r (%s): %d candidates, %d matched", query, options.match_mode, len(settings_map), len(results))
    return results[:max(0, options.max_results)]


def quick_search(
    query: str,
    settings: Sequence[SearchableSetting],
    options: Optional[SearchOptions] = None,
) -> List[SettingSearchResult]:
    """Build a throwaway index and search it. Rebuilds on every call."""
    settings = list(settings)
    return search_settings(query, build_search_index(settings), settings, options)


def search_with_filters(
    query: str,
    settings: Sequence[SearchableSetting],
    context: Optional[FilterContext] = None,
    options: Optional[SearchOptions] = None,
) -> FilteredSearch:
    """
    Handle a raw search-box query: strip and apply its @directives, then
    rank the surviving settings by the remaining text.

    With no free text left, `results` is empty and `setting_ids` lists every
    setting that passed the filters, in corpus order.
    """
    text, filters = parse_search_filters(query)
    filtered = apply_filters(settings, filters, context)
    results = quick_search(text, filtered, options) if text else []
    return FilteredSearch(
        text=text,
        filters=filters,
        setting_ids=[s.id for s in filtered],
        results=results,
    )
