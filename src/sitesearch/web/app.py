"""FastAPI application backing the SiteSearch web UI."""

from __future__ import annotations

import logging
from typing import Any, List

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from sitesearch.config import AppConfig
from sitesearch.index.corpus import ContentIndex, default_index
from sitesearch.index.search import ScoredRecord, Searcher, group_by_kind
from sitesearch.models import RecordKind
from sitesearch.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

MAX_QUERY_CHARS = 200
MAX_LIMIT = 50

app = FastAPI(title="SiteSearch Web", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class SearchPayload(BaseModel):
    query: str = Field(max_length=MAX_QUERY_CHARS)
    limit: int = AppConfig().max_results
    kinds: List[RecordKind] | None = None


def get_index() -> ContentIndex:
    return default_index()


def _clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


def _search_response(
    index: ContentIndex, query: str, limit: int, kinds: List[RecordKind] | None
) -> dict[str, Any]:
    searcher = Searcher(index)
    ranked: List[ScoredRecord] = searcher.rank(
        query, limit=_clamp_limit(limit), kinds=set(kinds) if kinds else None
    )
    groups = group_by_kind(item.record for item in ranked)
    return {
        "query": query,
        "results": [{**item.record.to_dict(), "score": item.score} for item in ranked],
        "groups": {kind.value: len(records) for kind, records in groups.items()},
    }


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    index = get_index()
    LOGGER.info("Serving %d records", len(index))


@app.get("/search")
async def search_get(
    q: str = Query("", max_length=MAX_QUERY_CHARS),
    limit: int = AppConfig().max_results,
    kind: List[RecordKind] | None = Query(None),
    index: ContentIndex = Depends(get_index),
) -> dict[str, Any]:
    return _search_response(index, q, limit, kind)


@app.post("/search")
async def search_post(
    payload: SearchPayload, index: ContentIndex = Depends(get_index)
) -> dict[str, Any]:
    return _search_response(index, payload.query, payload.limit, payload.kinds)


@app.get("/suggest")
async def suggest(
    q: str = Query("", max_length=MAX_QUERY_CHARS),
    index: ContentIndex = Depends(get_index),
) -> dict[str, List[str]]:
    return {"suggestions": Searcher(index).suggest(q)}


@app.get("/records")
async def list_records(index: ContentIndex = Depends(get_index)) -> dict[str, Any]:
    """List every record in corpus order."""
    return {"records": [record.to_dict() for record in index], "count": len(index)}


@app.get("/records/{record_id}")
async def get_record(record_id: str, index: ContentIndex = Depends(get_index)) -> dict[str, Any]:
    record = index.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
    return record.to_dict()
