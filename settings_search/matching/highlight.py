"""
highlight.py

Span geometry for match highlighting.
"""

from typing import Iterable, List

from .models import HighlightSpan, TextSegment


def merge_highlights(highlights: Iterable[HighlightSpan]) -> List[HighlightSpan]:
    """
    Sort spans by start and collapse overlapping or touching ones.
    The merged span keeps the field of the first span in its group.

    Example: [(0, 5), (3, 8), (10, 12)] -> [(0, 8), (10, 12)]
    """
    spans = sorted(highlights, key=lambda h: h.start)
    if not spans:
        return []

    merged = [spans[0]]
    for current in spans[1:]:
        last = merged[-1]
        if current.start <= last.end:
            merged[-1] = last._replace(end=max(last.end, current.end))
        else:
            merged.append(current)
    return merged


def highlight_matches(text: str, highlights: Iterable[HighlightSpan]) -> List[TextSegment]:
    """
    Cut text into alternating plain and highlighted segments for rendering.
    Offsets outside the text are clamped rather than rejected.
    """
    merged = merge_highlights(highlights)
    if not text or not merged:
        return [TextSegment(text, False)]

    segments: List[TextSegment] = []
    cursor = 0
    for span in merged:
        start = max(0, min(span.start, len(text)))
        end = max(start, min(span.end, len(text)))

        if cursor < start:
            segments.append(TextSegment(text[cursor:start], False))
        if start < end:
            segments.append(TextSegment(text[start:end], True))
        cursor = end

    if cursor < len(text):
        segments.append(TextSegment(text[cursor:], False))
    return segments
