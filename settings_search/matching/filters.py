"""
filters.py

Parsing and applying @directives typed into the settings search box:

    @modified            settings changed from their default
    @hasPolicy           settings controlled by a policy
    @id:<text>           id contains text
    @ext:<extension>     contributed by an extension
    @lang:<language>     has a language-specific override
    @tag:<text>          a tag contains text
    @feature:<text>      id, category or a tag contains text

Any directive can be negated with a leading '!'. Filters AND together,
including two filters of the same type.
"""

from typing import List, Optional, Sequence, Tuple
import re

from .models import FilterContext, SearchFilter, SearchableSetting

_FLAG_TYPES = {"modified": "modified", "haspolicy": "hasPolicy"}
_VALUE_TYPES = {"id": "id", "ext": "ext", "lang": "lang", "tag": "tag", "feature": "feature"}

_directive_re = re.compile(
    r"(?P<negate>!)?@(?:(?P<flag>modified|haspolicy)\b|(?P<kind>id|ext|lang|tag|feature):(?P<value>\S*))",
    re.IGNORECASE,
)
_multiple_spaces_re = re.compile(r"\s+")


def parse_search_filters(query: str) -> Tuple[str, List[SearchFilter]]:
    """
    Pull @directives out of a query.

    Returns:
        (remaining free text, whitespace-collapsed; filters in order of appearance)
    """
    if not query:
        return "", []

    filters: List[SearchFilter] = []

    def _extract(m: "re.Match[str]") -> str:
        if m.group("flag"):
            ftype = _FLAG_TYPES[m.group("flag").lower()]
            value = None
        else:
            ftype = _VALUE_TYPES[m.group("kind").lower()]
            value = m.group("value") or None
        filters.append(SearchFilter(type=ftype, value=value, negate=bool(m.group("negate"))))
        return ""

    text = _directive_re.sub(_extract, query)
    text = _multiple_spaces_re.sub(" ", text).strip()
    return text, filters


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _listed(mapping, key: str, setting_id: str) -> bool:
    ids = mapping.get(key.lower())
    return bool(ids) and setting_id in ids


def matches_filter(setting: SearchableSetting, f: SearchFilter, context: FilterContext) -> bool:
    """Test one filter, ignoring negation. A valued filter without a value matches nothing."""
    if f.type == "modified":
        return setting.id in context.modified_settings
    if f.type == "hasPolicy":
        return setting.id in context.policy_settings
    if not f.value:
        return False

    value = f.value.lower()
    tags = setting.tags or []
    if f.type == "id":
        return _contains(setting.id, value)
    if f.type == "ext":
        return _listed(context.extension_settings, value, setting.id)
    if f.type == "lang":
        return _listed(context.language_settings, value, setting.id)
    if f.type == "tag":
        return any(_contains(t, value) for t in tags)
    if f.type == "feature":
        return (
            _contains(setting.id, value)
            or _contains(setting.category, value)
            or any(_contains(t, value) for t in tags)
        )
    return False


def apply_filters(
    settings: Sequence[SearchableSetting],
    filters: Sequence[SearchFilter],
    context: Optional[FilterContext] = None,
) -> List[SearchableSetting]:
    """Keep the settings that pass every filter (each possibly negated)."""
    if not filters:
        return list(settings)
    context = context or FilterContext()
    return [
        s for s in settings
        if all(matches_filter(s, f, context) != f.negate for f in filters)
    ]
