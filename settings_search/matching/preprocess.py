"""
preprocess.py

Tokenization and term-frequency utilities used by the index and the ranker.

Notes:
- Tokens are lowercase; camelCase identifiers such as `inlineSuggestEnabled`
  are split into their words before lowercasing.
- Single-character tokens and a fixed English stopword list are dropped.
- No stemming or lemmatization: `formatting` and `format` are different terms.

Functions provided:
- tokenize(text) -> List[str]
- split_words(text) -> List[str]
- compute_tf(tokens) -> Dict[str, float]
"""

from typing import Dict, Iterable, List
from collections import Counter
import re

_STOPWORDS = frozenset([
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "must", "shall", "can", "need", "dare", "ought", "used",
    "to", "of", "in", "for", "on", "with", "at", "by", "from", "as", "into",
    "through", "during", "before", "after", "above", "below", "between", "under",
    "and", "but", "or", "nor", "so", "yet", "both", "either", "neither",
    "not", "only", "own", "same", "than", "too", "very", "just",
])

# whitespace plus punctuation that separates words in ids, titles and prose
_separator_re = re.compile(r"[\s\-_.,;:!?'\"()\[\]{}|\\/<>@#$%^&*+=~`]+")
_camel_re = re.compile(r"([a-z])([A-Z])")
# word boundaries used when comparing query words against candidate text
_word_separator_re = re.compile(r"[\s\-_.,;:]+")


def is_stopword(token: str) -> bool:
    return token in _STOPWORDS


def tokenize(text: str) -> List[str]:
    """
    Full tokenization pipeline:
    - split on whitespace and punctuation
    - split camelCase / PascalCase boundaries
    - lowercase
    - drop tokens of length <= 1 and stopwords

    Returns tokens in order of appearance (duplicates kept).
    """
    if not text:
        return []

    tokens = []
    for part in _separator_re.split(text):
        if not part:
            continue
        for piece in _camel_re.sub(r"\1 \2", part).split(" "):
            tok = piece.lower()
            if len(tok) > 1 and tok not in _STOPWORDS:
                tokens.append(tok)
    return tokens


def fold_case(text: str) -> str:
    """
    Lowercase without changing the length of the text, so offsets found in
    the result are offsets into the original. Characters whose lowercase
    form is longer (e.g. "\u0130") are kept as they are.
    """
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in text)


def split_words(text: str) -> List[str]:
    """Lowercase words of a candidate text, as seen by word-based matching."""
    if not text:
        return []
    return _word_separator_re.split(fold_case(text))


def compute_tf(tokens: Iterable[str]) -> Dict[str, float]:
    """
    Augmented term frequency: 0.5 + 0.5 * count / max_count.

    Every present term lands in (0.5, 1.0]; the most frequent term gets 1.0.
    This keeps long descriptions from outweighing short ones.
    """
    counts = Counter(tokens)
    if not counts:
        return {}
    max_count = max(counts.values())
    return {term: 0.5 + 0.5 * (count / max_count) for term, count in counts.items()}
