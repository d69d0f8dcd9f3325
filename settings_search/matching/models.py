"""
models.py

Records shared by the search engine: settings, options, filters and results.

Records are frozen pydantic models. Attributes use snake_case; camelCase
aliases (enumValues, settingId, matchType, ...) match the JSON the IDE side
sends and expects back. Either spelling is accepted on construction.
"""

from typing import Dict, List, Literal, NamedTuple, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from . import config

MatchMode = Literal["fuzzy", "contiguous", "word"]
MatchType = Literal["id", "title", "description", "enum", "tag"]
FilterType = Literal["modified", "hasPolicy", "id", "ext", "lang", "tag", "feature"]


class HighlightSpan(NamedTuple):
    """Half-open character range [start, end) into a field's raw text."""
    start: int
    end: int
    field: str = ""


class MatchResult(NamedTuple):
    score: float
    highlights: List[HighlightSpan]


class TextSegment(NamedTuple):
    text: str
    highlighted: bool


NO_MATCH = MatchResult(0.0, [])


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SearchableSetting(_Record):
    """
    Snapshot of one configuration option as supplied by the settings registry.
    The engine only reads it.
    """
    id: str
    title: str = ""
    description: str = ""
    enum_values: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None

    def __repr__(self):
        return f"SearchableSetting(id='{self.id}')"


class SettingSearchResult(_Record):
    setting_id: str
    score: float
    match_type: MatchType
    highlights: List[HighlightSpan] = Field(default_factory=list)

    @field_serializer("highlights")
    def _spans_as_objects(self, spans: List[HighlightSpan]) -> List[dict]:
        return [span._asdict() for span in spans]


class SearchFilter(_Record):
    """One parsed @directive, e.g. `!@tag:security`."""
    type: FilterType
    value: Optional[str] = None
    negate: bool = False


class FilterContext(_Record):
    """
    Membership data owned by the caller:
      - modified_settings: ids changed from their defaults
      - extension_settings: extension id -> setting ids it contributes
      - language_settings: language id -> setting ids with overrides
      - policy_settings: ids controlled by a policy
    """
    modified_settings: Set[str] = Field(default_factory=set)
    extension_settings: Dict[str, List[str]] = Field(default_factory=dict)
    language_settings: Dict[str, List[str]] = Field(default_factory=dict)
    policy_settings: Set[str] = Field(default_factory=set)


class SearchOptions(_Record):
    max_results: int = config.MAX_RESULTS
    min_score: float = config.MIN_SCORE
    boost_id: float = config.BOOST_ID
    boost_title: float = config.BOOST_TITLE
    boost_description: float = config.BOOST_DESCRIPTION
    match_mode: MatchMode = config.DEFAULT_MATCH_MODE


class FilteredSearch(_Record):
    """Outcome of a query that may mix free text and @directives."""
    text: str
    filters: List[SearchFilter] = Field(default_factory=list)
    setting_ids: List[str] = Field(default_factory=list)
    results: List[SettingSearchResult] = Field(default_factory=list)


def create_empty_filter_context() -> FilterContext:
    return FilterContext()
