"""Tests for the FastAPI web application."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from sitesearch.index.corpus import ContentIndex
from sitesearch.models import Record, RecordKind
from sitesearch.web.app import _clamp_limit, app, get_index


client = TestClient(app)


@pytest.fixture()
def small_index() -> Iterator[ContentIndex]:
    index = ContentIndex(
        Record(
            id=f"r{i}",
            title=f"Match {i}",
            content="match",
            kind=RecordKind.PAGE,
            target="home",
        )
        for i in range(60)
    )
    app.dependency_overrides[get_index] = lambda: index
    yield index
    app.dependency_overrides.clear()


class TestHelperFunctions:
    """Tests for helper functions."""

    def test_clamp_limit(self) -> None:
        """Limits are clamped to 1..50."""
        assert _clamp_limit(0) == 1
        assert _clamp_limit(-5) == 1
        assert _clamp_limit(10) == 10
        assert _clamp_limit(500) == 50


class TestSearchEndpoint:
    """Tests for the /search endpoints."""

    def test_search_empty_query(self) -> None:
        """Empty queries return an empty result list."""
        response = client.get("/search", params={"q": ""})
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_search_whitespace_query(self) -> None:
        """Whitespace-only queries return an empty result list."""
        response = client.post("/search", json={"query": "   "})
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_search_get(self) -> None:
        """Returns ranked records with scores."""
        response = client.get("/search", params={"q": "dsge"})
        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "dsge"
        assert [hit["id"] for hit in body["results"]] == ["blog-1", "pub-1", "home"]
        assert body["results"][0]["score"] == 24
        assert body["results"][0]["target"] == "blog"
        assert body["results"][0]["tags"] == ["Macroeconomics", "DSGE", "Policy"]
        assert body["groups"] == {"blog": 1, "publication": 1, "page": 1}

    def test_search_post(self) -> None:
        """POST accepts a JSON payload with kind filters."""
        response = client.post("/search", json={"query": "dsge", "kinds": ["publication"]})
        assert response.status_code == 200
        assert [hit["id"] for hit in response.json()["results"]] == ["pub-1"]

    def test_search_get_kind_filter(self) -> None:
        """GET accepts repeated kind parameters."""
        response = client.get("/search", params=[("q", "dsge"), ("kind", "page"), ("kind", "blog")])
        assert response.status_code == 200
        assert [hit["id"] for hit in response.json()["results"]] == ["blog-1", "home"]

    def test_search_invalid_kind(self) -> None:
        """Unknown kinds fail validation."""
        response = client.get("/search", params={"q": "dsge", "kind": "podcast"})
        assert response.status_code == 422

    def test_search_query_too_long(self) -> None:
        """Overlong queries fail validation."""
        response = client.get("/search", params={"q": "x" * 500})
        assert response.status_code == 422

    def test_search_default_limit(self, small_index: ContentIndex) -> None:
        """At most ten results by default."""
        response = client.get("/search", params={"q": "match"})
        assert len(response.json()["results"]) == 10

    def test_search_clamps_limit(self, small_index: ContentIndex) -> None:
        """Limits above the maximum are clamped."""
        response = client.post("/search", json={"query": "match", "limit": 500})
        assert len(response.json()["results"]) == 50


class TestSuggestEndpoint:
    """Tests for GET /suggest."""

    def test_suggest(self) -> None:
        """Returns lowercase completions."""
        response = client.get("/suggest", params={"q": "Mac"})
        assert response.status_code == 200
        assert response.json() == {"suggestions": ["macroeconomics", "machine", "machine learning"]}

    def test_suggest_empty(self) -> None:
        """Empty prefixes return nothing."""
        response = client.get("/suggest")
        assert response.json() == {"suggestions": []}


class TestRecordsEndpoint:
    """Tests for the /records endpoints."""

    def test_list_records(self) -> None:
        """Lists the bundled corpus in order."""
        response = client.get("/records")
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 10
        assert body["records"][0]["id"] == "home"

    def test_get_record(self) -> None:
        """Returns one record with its metadata."""
        response = client.get("/records/pub-3")
        assert response.status_code == 200
        assert response.json()["metadata"] == {"journal": "American Economic Review", "year": "2023"}

    def test_get_record_not_found(self) -> None:
        """Returns 404 for unknown ids."""
        response = client.get("/records/missing")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]
