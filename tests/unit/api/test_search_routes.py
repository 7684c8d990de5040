"""Tests for the search endpoints."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from figurevault.api.app import create_app
from figurevault.api.deps import set_search_service
from figurevault.config.settings import Settings
from figurevault.search.exceptions import IndexQueryError
from figurevault.search.service import SearchService
from figurevault.store.memory import InMemoryRecordStore

# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def service(settings: Settings, store: InMemoryRecordStore) -> SearchService:
    return SearchService(settings, store)


@pytest.fixture
def client(settings: Settings, service: SearchService) -> TestClient:
    """Create a test client for the API."""
    app = create_app(settings)
    set_search_service(service)
    yield TestClient(app)
    set_search_service(None)


@pytest.fixture
def headers(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


# ══════════════════════════════════════════════════════════════════════════════
# GET /v1/search/suggestions
# ══════════════════════════════════════════════════════════════════════════════


class TestSuggestions:
    def test_returns_word_wheel_matches(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Mik"}, headers=headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["count"] == 3
        assert [f["name"] for f in data["data"]] == ["Good Night Miku", "Hatsune Miku", "Mikasa Ackerman"]

    def test_result_shape(self, client: TestClient, headers: dict[str, str], user_id: str) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Hatsune"}, headers=headers)
        figure = resp.json()["data"][0]
        assert set(figure) == {
            "id", "manufacturer", "name", "scale", "mfc_link", "location",
            "box_number", "image_url", "user_id", "created_at", "updated_at",
        }
        assert figure["user_id"] == user_id

    def test_limit(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Mik", "limit": 1}, headers=headers)
        assert resp.json()["count"] == 1

    def test_limit_above_cap_is_capped(self, client: TestClient, service: SearchService, headers: dict[str, str]) -> None:
        with patch.object(service, "autocomplete", new_callable=AsyncMock) as mock_autocomplete:
            mock_autocomplete.return_value = []
            client.get("/v1/search/suggestions", params={"q": "Mik", "limit": 500}, headers=headers)
        assert mock_autocomplete.call_args.kwargs["limit"] == 50

    def test_missing_query_returns_400(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/suggestions", headers=headers)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Query parameter is required"}

    def test_short_query_returns_400(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": " a "}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Query must be at least 2 characters"

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_returns_400(self, client: TestClient, headers: dict[str, str], limit: int) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Mik", "limit": limit}, headers=headers)
        assert resp.status_code == 400

    def test_missing_identity_returns_401(self, client: TestClient) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Mik"})
        assert resp.status_code == 401
        assert resp.json()["success"] is False

    def test_malformed_identity_returns_400(self, client: TestClient) -> None:
        resp = client.get("/v1/search/suggestions", params={"q": "Mik"}, headers={"X-User-Id": "admin"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid user identifier"

    def test_service_error_returns_500(self, client: TestClient, service: SearchService, headers: dict[str, str]) -> None:
        with patch.object(service, "autocomplete", new_callable=AsyncMock) as mock_autocomplete:
            mock_autocomplete.side_effect = RuntimeError("store unreachable")
            resp = client.get("/v1/search/suggestions", params={"q": "Mik"}, headers=headers)
        assert resp.status_code == 500
        assert "store unreachable" not in resp.text


# ══════════════════════════════════════════════════════════════════════════════
# GET /v1/search/partial
# ══════════════════════════════════════════════════════════════════════════════


class TestPartial:
    def test_returns_substring_matches(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/partial", params={"q": "kasa"}, headers=headers)
        assert resp.status_code == 200
        assert [f["name"] for f in resp.json()["data"]] == ["Mikasa Ackerman"]

    def test_pagination(self, client: TestClient, headers: dict[str, str]) -> None:
        pages = [
            client.get("/v1/search/partial", params={"q": "mi", "limit": 1, "offset": offset}, headers=headers).json()
            for offset in (0, 1)
        ]
        both = client.get("/v1/search/partial", params={"q": "mi", "limit": 2}, headers=headers).json()
        assert pages[0]["data"] + pages[1]["data"] == both["data"]

    def test_negative_offset_returns_400(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/partial", params={"q": "mi", "offset": -1}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Offset must be a non-negative integer"

    def test_non_integer_limit_is_rejected(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/partial", params={"q": "mi", "limit": "ten"}, headers=headers)
        assert resp.status_code == 422

    def test_metacharacters_are_safe(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/search/partial", params={"q": "a.b*c("}, headers=headers)
        assert resp.status_code == 200
        assert resp.json()["count"] == 0


# ══════════════════════════════════════════════════════════════════════════════
# GET /v1/figures/search
# ══════════════════════════════════════════════════════════════════════════════


class TestFigureSearch:
    def test_all_terms_must_match(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/figures/search", params={"query": "Good Smile"}, headers=headers)
        assert resp.status_code == 200
        data = resp.json()
        assert {f["id"] for f in data["data"]} == {"f001", "f004"}
        assert data["count"] == 2

    def test_results_have_no_timestamps(self, client: TestClient, headers: dict[str, str]) -> None:
        data = client.get("/v1/figures/search", params={"query": "Miku"}, headers=headers).json()["data"]
        assert all(f["created_at"] is None for f in data)

    def test_missing_query_returns_400(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/figures/search", headers=headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Search query is required"

    def test_short_query_is_empty_success(self, client: TestClient, headers: dict[str, str]) -> None:
        resp = client.get("/v1/figures/search", params={"query": "G"}, headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "count": 0, "data": []}

    def test_index_failure_returns_500(self, client: TestClient, service: SearchService, headers: dict[str, str]) -> None:
        with patch.object(service, "search", new_callable=AsyncMock) as mock_search:
            mock_search.side_effect = IndexQueryError("OpenSearch query failed")
            resp = client.get("/v1/figures/search", params={"query": "Good Smile"}, headers=headers)
        assert resp.status_code == 500
        assert resp.json()["message"] == "Search processing failed"


class TestLifespan:
    def test_startup_builds_service_from_seed(self, tmp_path: Path, user_id: str) -> None:
        seed = tmp_path / "figures.yaml"
        seed.write_text(f"- {{id: s1, manufacturer: Alter, name: Saber Lily, user_id: '{user_id}'}}\n")
        settings = Settings(_env_file=None, store={"seed_file": str(seed)})  # type: ignore[call-arg]

        with TestClient(create_app(settings)) as client:
            resp = client.get("/v1/search/suggestions", params={"q": "lily"}, headers={"X-User-Id": user_id})

        assert resp.status_code == 200
        assert [f["id"] for f in resp.json()["data"]] == ["s1"]
