"""
datastore.py

Builds the TF-IDF index used by the ranker and loads settings catalogs
from CSV files.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional
import logging
import math
import os

import pandas as pd

from .models import SearchableSetting
from .preprocess import compute_tf, tokenize

logger = logging.getLogger(__name__)

TermFrequencies = Dict[str, float]

_REQUIRED_COLUMNS = ("id", "title", "description")
_LIST_SEPARATOR = "|"


class TFIDFIndex:
    """
    Immutable corpus statistics:
      - documents: setting id -> term frequencies of its combined text
      - idf: term -> smoothed inverse document frequency
      - total_documents: number of settings the index was built from

    Never patched in place; rebuild it when the corpus changes.
    """
    def __init__(self, documents: Mapping[str, TermFrequencies], idf: Mapping[str, float], total_documents: int):
        self.documents: Mapping[str, Mapping[str, float]] = MappingProxyType(
            {sid: MappingProxyType(dict(tf)) for sid, tf in documents.items()}
        )
        self.idf: Mapping[str, float] = MappingProxyType(dict(idf))
        self.total_documents: int = total_documents

    def vocabulary(self) -> List[str]:
        """Every distinct term, in the order it was first seen."""
        seen: Dict[str, None] = {}
        for tf in self.documents.values():
            for term in tf:
                seen.setdefault(term, None)
        return list(seen)

    def __repr__(self):
        return f"TFIDFIndex(documents={len(self.documents)}, terms={len(self.idf)})"


def setting_text(setting: SearchableSetting) -> str:
    """All searchable text of a setting joined into one bag of words."""
    parts = [setting.id, setting.title, setting.description]
    parts.extend(setting.enum_values or [])
    parts.extend(setting.tags or [])
    parts.append(setting.category or "")
    return " ".join(parts)


def compute_idf(documents: Mapping[str, TermFrequencies]) -> Dict[str, float]:
    """Smoothed IDF: ln((N + 1) / (df + 1)) + 1, always >= 1."""
    total_docs = len(documents)
    doc_freq: Dict[str, int] = {}
    for tf in documents.values():
        for term in tf:
            doc_freq[term] = doc_freq.get(term, 0) + 1
    return {term: math.log((total_docs + 1) / (df + 1)) + 1 for term, df in doc_freq.items()}


def build_search_index(settings: Iterable[SearchableSetting]) -> TFIDFIndex:
    settings = list(settings)
    documents: Dict[str, TermFrequencies] = {}
    for setting in settings:
        documents[setting.id] = compute_tf(tokenize(setting_text(setting)))

    idf = compute_idf(documents)
    logger.debug("Built search index: %d documents, %d terms", len(documents), len(idf))
    return TFIDFIndex(documents, idf, total_documents=len(settings))


def _split_list(value) -> Optional[List[str]]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    items = [v.strip() for v in str(value).split(_LIST_SEPARATOR)]
    items = [v for v in items if v]
    return items or None


def _cell(row, column: str) -> str:
    value = row.get(column)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


class SettingsCatalog:
    """
    Stores settings records loaded from CSV files and provides:
      - entries[]: list of SearchableSetting, in load order
      - id_map: setting id -> SearchableSetting
    """
    def __init__(self):
        self.entries: List[SearchableSetting] = []
        self.id_map: Dict[str, SearchableSetting] = {}

    # ----------------------------
    # Load CSV and populate catalog
    # ----------------------------
    def load_csv(self, path: str) -> int:
        """
        Load a CSV of settings into the catalog.

        CSV must contain the columns 'id', 'title' and 'description'.
        Optional columns 'enumValues' and 'tags' hold '|'-separated lists,
        'category' a single value.

        Args:
            path: string path of CSV file

        Returns:
            number of settings added
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"CSV not found: {path}")

        df = pd.read_csv(path, dtype=str)

        missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"CSV {path} missing column(s): {', '.join(missing)}")

        added = 0
        for _, row in df.iterrows():
            setting_id = _cell(row, "id")
            if not setting_id:
                continue

            category = _cell(row, "category")
            self.add(SearchableSetting(
                id=setting_id,
                title=_cell(row, "title"),
                description=_cell(row, "description"),
                enum_values=_split_list(row.get("enumValues")),
                tags=_split_list(row.get("tags")),
                category=category or None,
            ))
            added += 1

        logger.info("Loaded %d settings from %s", added, path)
        return added

    def add(self, setting: SearchableSetting):
        """Add a setting; a later record with the same id replaces the earlier one."""
        if setting.id in self.id_map:
            self.entries = [e for e in self.entries if e.id != setting.id]
        self.entries.append(setting)
        self.id_map[setting.id] = setting

    # ----------------------------
    # Accessors
    # ----------------------------
    def all_settings(self) -> List[SearchableSetting]:
        return list(self.entries)

    def get(self, setting_id: str) -> Optional[SearchableSetting]:
        return self.id_map.get(setting_id)

    def size(self) -> int:
        return len(self.entries)
