"""
main.py

FastAPI application exposing settings search to a local IDE frontend.
Loads the settings catalog CSV at startup, builds the index once and serves
search and suggestion requests.

Run with:
    uvicorn settings_search.main:app --reload
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import logging
import os

from settings_search.matching.datastore import SettingsCatalog, build_search_index
from settings_search.matching.filters import apply_filters, parse_search_filters
from settings_search.matching.matcher import search_settings
from settings_search.matching.models import FilterContext, FilteredSearch, SearchOptions
from settings_search.matching.suggest import get_search_suggestions
from settings_search.matching import config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("settings_search")

# --------
# Config
# --------
DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
CATALOG_CSV = os.environ.get("SETTINGS_CATALOG_CSV", os.path.join(DATA_DIR, "settings.csv"))

# --------
# FastAPI app
# --------
app = FastAPI(title="Settings Search API")

# Allow CORS from local dev (adjust origins for prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],            # change to frontend origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------
# Request models
# --------
class SearchRequest(BaseModel):
    query: str
    options: Optional[SearchOptions] = None
    modified: List[str] = Field(default_factory=list)
    extensions: Dict[str, List[str]] = Field(default_factory=dict)
    languages: Dict[str, List[str]] = Field(default_factory=dict)
    policies: List[str] = Field(default_factory=list)


class SuggestRequest(BaseModel):
    partial: str
    limit: int = config.SUGGESTION_LIMIT

# --------
# Startup: load catalog and build the index
# --------
CATALOG = SettingsCatalog()
try:
    if os.path.exists(CATALOG_CSV):
        CATALOG.load_csv(CATALOG_CSV)
    else:
        logger.warning("Settings catalog not found at %s", CATALOG_CSV)
except Exception as e:
    # fail-fast if the catalog exists but cannot be read
    raise RuntimeError(f"Failed to load settings catalog: {e}")

SETTINGS = CATALOG.all_settings()
INDEX = build_search_index(SETTINGS)
logger.info("Search index built over %d settings.", CATALOG.size())


# --------
# Endpoints
# --------
@app.get("/api/health")
async def health():
    return {"status": "ok", "settings_loaded": CATALOG.size()}


@app.post("/api/search")
async def search(req: SearchRequest):
    if not req.query or not req.query.strip():
        raise HTTPException(status_code=400, detail="query must be a non-empty string")

    context = FilterContext(
        modified_settings=set(req.modified),
        extension_settings={k.lower(): v for k, v in req.extensions.items()},
        language_settings={k.lower(): v for k, v in req.languages.items()},
        policy_settings=set(req.policies),
    )
    text, filters = parse_search_filters(req.query)
    filtered = apply_filters(SETTINGS, filters, context)
    # the startup index covers the whole catalog; the filtered list narrows it
    results = search_settings(text, INDEX, filtered, req.options) if text else []

    out = FilteredSearch(
        text=text,
        filters=filters,
        setting_ids=[s.id for s in filtered],
        results=results,
    )
    return out.model_dump(by_alias=True)


@app.post("/api/suggest")
async def suggest(req: SuggestRequest):
    return {"suggestions": get_search_suggestions(req.partial, INDEX, limit=req.limit)}
