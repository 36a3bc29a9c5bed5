"""
Organisation lookup endpoints backing the autocomplete field.

GET /api/v1/lookup/organisations?name=<q>          → ["Johnson Ltd", ...]
GET /api/v1/lookup/organisations/records?name=<q>  → [{"label": ..., "value": id}, ...]

Matching is a case-insensitive literal substring match (``%`` and ``_`` in the
query match themselves).  Names starting with the query come first, then
alphabetical.  Queries shorter than LOOKUP_MIN_LENGTH return ``[]`` without
touching the database.  Answers are cached for LOOKUP_CACHE_TTL seconds.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, Query

from api.database import get_db, get_db_path
from api.models import OrganisationOut
from utils.cache import TTLCache
from utils.config import AppConfig
from utils.strings import escape_like, normalize_whitespace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lookup", tags=["lookup"])

_cfg = AppConfig.from_env().lookup
_lookup_cache: TTLCache = TTLCache(maxsize=512, ttl_seconds=_cfg.cache_ttl)


def clear_cache() -> None:
    _lookup_cache.clear()


def _find_organisations(conn: sqlite3.Connection, query: str, limit: int) -> list[dict]:
    escaped = escape_like(query)
    rows = conn.execute(
        "SELECT id, name FROM organisations "
        "WHERE name LIKE ? ESCAPE '\\' "
        "ORDER BY CASE WHEN name LIKE ? ESCAPE '\\' THEN 0 ELSE 1 END, "
        "name COLLATE NOCASE, id "
        "LIMIT ?",
        (f"%{escaped}%", f"{escaped}%", limit),
    ).fetchall()
    return [{"label": r["name"], "value": r["id"]} for r in rows]


def search_organisations(conn: sqlite3.Connection, name: str) -> list[dict]:
    """Return ``{label, value}`` matches for *name*, cached per query."""
    query = normalize_whitespace(name)
    if len(query) < _cfg.min_length:
        return []
    cache_key = (str(get_db_path()), query.casefold(), _cfg.max_results)
    results = _lookup_cache.get_or_set(
        cache_key, lambda: _find_organisations(conn, query, _cfg.max_results)
    )
    logger.debug("lookup query=%r results=%d", query, len(results))
    return results


@router.get(
    "/organisations",
    response_model=list[str],
    summary="Organisation names matching a query",
)
def lookup_organisation_names(
    name: str = Query("", description="Text typed so far", examples=["john"]),
    conn: sqlite3.Connection = Depends(get_db),
) -> list[str]:
    """Return organisation names containing *name*, best matches first."""
    return [r["label"] for r in search_organisations(conn, name)]


@router.get(
    "/organisations/records",
    response_model=list[OrganisationOut],
    summary="Organisation records matching a query",
)
def lookup_organisation_records(
    name: str = Query("", description="Text typed so far", examples=["john"]),
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict]:
    """Return ``{label, value}`` records; ``value`` is the organisation id."""
    return search_organisations(conn, name)
