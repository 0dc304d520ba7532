from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import requests

from movies_backend.config import Settings

logger = logging.getLogger(__name__)


class TmdbConfigurationError(RuntimeError):
    """The client is not configured to talk to TMDb (e.g. no API key)."""

    status_code = 500


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class TmdbNotFoundError(TmdbClientError):
    pass


class TmdbTimeoutError(TmdbClientError):
    pass


def _require_api_key(api_key: str | None) -> str:
    resolved = (api_key or "").strip()
    if not resolved:
        raise TmdbConfigurationError("TMDB_API_KEY is not set.")
    return resolved


def _error_message(resp: requests.Response) -> str:
    """Best-effort message from a TMDb error body (`status_message`, `message` or `errors`)."""

    fallback = f"TMDb request failed with HTTP {resp.status_code}."
    try:
        payload = resp.json()
    except ValueError:
        return fallback
    if not isinstance(payload, Mapping):
        return fallback

    for key in ("status_message", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    errors = payload.get("errors")
    if isinstance(errors, list):
        messages = [e.strip() for e in errors if isinstance(e, str) and e.strip()]
        if messages:
            return "; ".join(messages)
    return fallback


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.Timeout as exc:
        raise TmdbTimeoutError(
            f"TMDb request timed out after {timeout_seconds:g}s.",
            status_code=504,
        ) from exc
    except requests.RequestException as exc:
        raise TmdbClientError(f"TMDb request failed: {exc}", status_code=502) from exc

    if resp.status_code != 200:
        error_cls = TmdbNotFoundError if resp.status_code == 404 else TmdbClientError
        raise error_cls(
            _error_message(resp),
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise TmdbClientError(
            "TMDb returned non-JSON response.",
            status_code=502,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).", status_code=502)
    return payload


class TmdbClient:
    """
    Thin TMDb v3 client.

    Configuration comes from an injected `Settings`; nothing is read from the
    environment here. Every request carries the `api_key` query parameter and is
    bounded by `settings.request_timeout_seconds`. Failures are not retried.
    """

    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        self.settings = settings
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> TmdbClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, path: str, params: Mapping[str, Any]) -> dict[str, Any]:
        # Checked on every call so a missing key fails before any network traffic.
        api_key = _require_api_key(self.settings.tmdb_api_key)
        url = f"{self.settings.tmdb_base_url}{path}"
        logger.debug("TMDb GET %s params=%s", path, dict(params))
        return _request_json(
            self.session,
            url,
            params={"api_key": api_key, **params},
            timeout_seconds=self.settings.request_timeout_seconds,
        )

    def discover_movies(self, *, page: int, language: str) -> dict[str, Any]:
        """Browse movies in TMDb's default ordering via `/discover/movie`."""
        return self._get("/discover/movie", {"page": int(page), "language": language})

    def search_movies(self, query: str, *, page: int, language: str) -> dict[str, Any]:
        """Full-text movie search via `/search/movie` with adult titles excluded."""
        return self._get(
            "/search/movie",
            {
                "query": query,
                "page": int(page),
                "language": language,
                "include_adult": "false",
            },
        )

    def fetch_movie_details(
        self,
        movie_id: int | str,
        *,
        language: str,
        append_to_response: Iterable[str] = (),
        include_image_language: str | None = None,
        include_video_language: str | None = None,
    ) -> dict[str, Any]:
        """
        Fetch `/movie/{id}`, optionally embedding sub-resources.

        `append_to_response` keeps the caller's order; duplicates and blanks are dropped.
        """

        params: dict[str, Any] = {"language": language}
        append_parts: list[str] = []
        for part in append_to_response:
            if isinstance(part, str) and part.strip() and part.strip() not in append_parts:
                append_parts.append(part.strip())
        if append_parts:
            params["append_to_response"] = ",".join(append_parts)
        if include_image_language:
            params["include_image_language"] = include_image_language
        if include_video_language:
            params["include_video_language"] = include_video_language
        return self._get(f"/movie/{str(movie_id).strip()}", params)
