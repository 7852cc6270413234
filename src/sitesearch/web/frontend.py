"""Static HTML search page for the SiteSearch web UI."""

from __future__ import annotations

from functools import lru_cache
from importlib.resources import files

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from sitesearch.index.corpus import ContentIndex, default_index

router = APIRouter()


@lru_cache(maxsize=4)
def _load_template(name: str = "index.html") -> str:
    template = files("sitesearch.web").joinpath("templates", name)
    return template.read_text(encoding="utf-8")


def render_page(index: ContentIndex) -> str:
    kinds = ", ".join(kind.value for kind in index.kinds())
    return (
        _load_template()
        .replace("{{ record_count }}", str(len(index)))
        .replace("{{ kinds }}", kinds)
    )


def _page_index() -> ContentIndex:
    return default_index()


@router.get("/", response_class=HTMLResponse)
async def search_page(index: ContentIndex = Depends(_page_index)) -> HTMLResponse:
    return HTMLResponse(content=render_page(index))
