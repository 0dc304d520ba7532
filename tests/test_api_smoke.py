"""
Smoke tests for the movies API.

TMDb is never contacted: the client dependency is replaced with a mock that
serves deterministic pages and the detail fixture.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api import deps
from api.main import app
from movies_backend.config import Settings
from movies_backend.integrations.tmdb.client import TmdbClient, TmdbNotFoundError, TmdbTimeoutError

VALID_MOVIE_ID = 550
NONEXISTENT_MOVIE_ID = 999999


def _discover_payload(*, page: int, language: str) -> dict:
    return {
        "page": page,
        "results": [
            {
                "id": 100 + (page - 1) * 20 + i,
                "title": f"Test Movie {100 + (page - 1) * 20 + i}",
                "poster_path": f"/poster{i}.jpg",
                "release_date": "2024-01-01",
                "vote_average": 7.5,
            }
            for i in range(20)
        ],
        "total_pages": 500,
        "total_results": 10000,
    }


def _search_payload(query: str, *, page: int, language: str) -> dict:
    return {
        "page": page,
        "results": [
            {"id": 200 + (page - 1) * 20 + i, "title": f"{query} Movie {i}", "vote_average": 8.0}
            for i in range(20)
        ],
        "total_pages": 50,
        "total_results": 1000,
    }


def _detail_payload(movie_id, **kwargs) -> dict:
    if int(movie_id) == NONEXISTENT_MOVIE_ID:
        raise TmdbNotFoundError("The resource you requested could not be found.", status_code=404)
    repo_root = Path(__file__).resolve().parents[1]
    payload = json.loads(
        (repo_root / "tests" / "fixtures" / "tmdb" / "movie_detail_sample.json").read_text(encoding="utf-8")
    )
    payload["id"] = int(movie_id)
    return payload


@pytest.fixture
def mock_tmdb():
    """Create a mock TMDb client."""
    mock_client = MagicMock(spec=TmdbClient)
    mock_client.discover_movies.side_effect = _discover_payload
    mock_client.search_movies.side_effect = _search_payload
    mock_client.fetch_movie_details.side_effect = _detail_payload
    return mock_client


@pytest.fixture
def client(mock_tmdb):
    """Create a test client with mocked settings and TMDb dependencies."""
    app.dependency_overrides[deps.get_settings] = lambda: Settings(tmdb_api_key="test-key")
    app.dependency_overrides[deps.get_tmdb_client] = lambda: mock_tmdb
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test health check endpoints."""

    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    def test_health_returns_ok(self, client: TestClient, path: str):
        response = client.get(path)
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "backend"
        assert data["timestamp"]


class TestMoviesListEndpoint:
    """Test GET /movies with a mocked TMDb client."""

    def test_list_movies_defaults(self, client: TestClient, mock_tmdb: MagicMock):
        response = client.get("/movies")
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["total_pages"] == 1000
        assert data["total_results"] == 10000
        assert len(data["results"]) == 10
        assert set(data["results"][0]) == {"id", "title", "poster_path", "release_date", "vote_average"}
        mock_tmdb.discover_movies.assert_called_once_with(page=1, language="en-US")

    def test_list_movies_under_api_prefix(self, client: TestClient):
        response = client.get("/api/movies", params={"page": 2})
        assert response.status_code == 200
        assert response.json()["results"][0]["id"] == 110

    def test_list_movies_search_and_language(self, client: TestClient, mock_tmdb: MagicMock):
        response = client.get("/movies", params={"search": "  Matrix ", "lang": "ru", "page": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 3
        assert data["total_pages"] == 100
        assert data["results"][0]["id"] == 220
        assert data["results"][0]["poster_path"] is None
        mock_tmdb.search_movies.assert_called_once_with("Matrix", page=2, language="ru-RU")

    @pytest.mark.parametrize("page", ["0", "-1", "1.5", "abc", "1_0", "1e1"])
    def test_list_movies_invalid_page_returns_400(self, client: TestClient, mock_tmdb: MagicMock, page: str):
        response = client.get("/movies", params={"page": page})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["status"] == 400
        assert page in error["message"]
        assert mock_tmdb.discover_movies.call_count == 0

    def test_list_movies_upstream_timeout_returns_504(self, client: TestClient, mock_tmdb: MagicMock):
        mock_tmdb.discover_movies.side_effect = TmdbTimeoutError("TMDb request timed out after 10s.", status_code=504)
        response = client.get("/movies")
        assert response.status_code == 504
        assert response.json() == {"error": {"status": 504, "message": "TMDb request timed out after 10s."}}


class TestMovieDetailEndpoint:
    """Test GET /movies/{id} with a mocked TMDb client."""

    def test_get_movie_returns_normalized_detail(self, client: TestClient):
        response = client.get(f"/movies/{VALID_MOVIE_ID}", params={"lang": "en"})
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == VALID_MOVIE_ID
        for key in ("title", "overview", "runtime", "genres", "cast", "crew", "videos", "images", "reviews"):
            assert key in data
        assert len(data["reviews"]) == 5
        assert len(data["images"]["backdrops"]) == 12
        assert len(data["images"]["posters"]) == 8

    def test_get_movie_under_api_prefix_defaults_language(self, client: TestClient, mock_tmdb: MagicMock):
        response = client.get(f"/api/movies/{VALID_MOVIE_ID}")
        assert response.status_code == 200
        assert response.json()["id"] == VALID_MOVIE_ID
        _, call_kwargs = mock_tmdb.fetch_movie_details.call_args
        assert call_kwargs["language"] == "en-US"

    def test_get_movie_returns_404_envelope_when_not_found(self, client: TestClient):
        response = client.get(f"/movies/{NONEXISTENT_MOVIE_ID}", params={"lang": "en"})
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["status"] == 404
        assert error["message"] == "The resource you requested could not be found."

    @pytest.mark.parametrize("movie_id", ["abc", "123abc", "123-456", "123.456"])
    def test_non_numeric_movie_id_is_not_routed(self, client: TestClient, mock_tmdb: MagicMock, movie_id: str):
        response = client.get(f"/movies/{movie_id}")
        assert response.status_code == 404
        assert response.json()["error"]["status"] == 404
        assert mock_tmdb.fetch_movie_details.call_count == 0

    def test_unexpected_error_returns_generic_500(self, mock_tmdb: MagicMock):
        mock_tmdb.fetch_movie_details.side_effect = RuntimeError("kaboom")
        app.dependency_overrides[deps.get_settings] = lambda: Settings(tmdb_api_key="test-key")
        app.dependency_overrides[deps.get_tmdb_client] = lambda: mock_tmdb
        try:
            response = TestClient(app, raise_server_exceptions=False).get(f"/movies/{VALID_MOVIE_ID}")
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        assert response.json() == {"error": {"status": 500, "message": "Internal Server Error"}}


class TestMissingCredential:
    """Without TMDB_API_KEY the real client must fail before touching the network."""

    def test_missing_api_key_returns_500_without_network_call(self, monkeypatch: pytest.MonkeyPatch):
        from movies_backend.integrations.tmdb import client as tmdb_client

        session = MagicMock()
        monkeypatch.setattr(tmdb_client.requests, "Session", lambda: session)
        app.dependency_overrides[deps.get_settings] = lambda: Settings(tmdb_api_key=None)
        try:
            list_response = TestClient(app).get("/movies")
            detail_response = TestClient(app).get(f"/movies/{VALID_MOVIE_ID}")
        finally:
            app.dependency_overrides.clear()

        for response in (list_response, detail_response):
            assert response.status_code == 500
            assert response.json() == {"error": {"status": 500, "message": "TMDB_API_KEY is not set."}}
        assert session.get.call_count == 0
        assert session.close.call_count == 2


class TestCORSConfiguration:
    """Test CORS is properly configured."""

    def test_cors_headers_present(self, client: TestClient):
        response = client.options(
            "/movies",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


@pytest.fixture
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Let the lifespan build settings from a known environment."""
    monkeypatch.setenv("TMDB_API_KEY", "test-key")
    deps.get_settings.cache_clear()
    yield
    deps.get_settings.cache_clear()


class TestLoggingSetup:
    """Logging is configured on startup, never at import time."""

    def test_lifespan_installs_stdout_handler_on_bare_root_logger(
        self, monkeypatch: pytest.MonkeyPatch, fresh_settings
    ):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level
        root.handlers.clear()
        try:
            with TestClient(app) as test_client:
                assert test_client.get("/health").status_code == 200
                handlers = list(root.handlers)
                level = root.level
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stdout
        assert level == logging.DEBUG

    def test_lifespan_keeps_existing_root_handlers(self, fresh_settings):
        root = logging.getLogger()
        sentinel = logging.NullHandler()
        root.addHandler(sentinel)
        try:
            before = list(root.handlers)
            with TestClient(app) as test_client:
                assert test_client.get("/health").status_code == 200
                after = list(root.handlers)
        finally:
            root.removeHandler(sentinel)

        assert after == before
