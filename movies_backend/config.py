"""Process-wide configuration, built once at startup and injected where needed."""
from __future__ import annotations

from dataclasses import dataclass

from movies_backend.utils.env import env_float, env_int, env_str, load_env

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_REQUEST_TIMEOUT_SECONDS = 10.0

# Application pages are smaller than TMDb pages.
RESULTS_PER_PAGE = 10
TMDB_RESULTS_PER_PAGE = 20

MAX_REVIEWS = 5
MAX_BACKDROPS = 12
MAX_POSTERS = 8


@dataclass(frozen=True)
class DetailLimits:
    """Per-collection caps applied to a movie detail response."""

    max_reviews: int = MAX_REVIEWS
    max_backdrops: int = MAX_BACKDROPS
    max_posters: int = MAX_POSTERS

    def __post_init__(self) -> None:
        for name in ("max_reviews", "max_backdrops", "max_posters"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be zero or greater.")


@dataclass(frozen=True)
class Settings:
    tmdb_api_key: str | None = None
    tmdb_base_url: str = TMDB_API_BASE_URL
    request_timeout_seconds: float = TMDB_REQUEST_TIMEOUT_SECONDS
    results_per_page: int = RESULTS_PER_PAGE
    tmdb_results_per_page: int = TMDB_RESULTS_PER_PAGE
    detail_limits: DetailLimits = DetailLimits()

    def __post_init__(self) -> None:
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive.")
        if self.results_per_page < 1 or self.tmdb_results_per_page < 1:
            raise ValueError("Page sizes must be positive integers.")

    @classmethod
    def from_env(cls, *, load_dotenv_file: bool = True) -> Settings:
        """
        Build settings from the process environment (and `.env` when present).

        A missing `TMDB_API_KEY` is not an error here; the TMDb client refuses to
        issue requests without it so the failure surfaces as a configuration error.
        """

        if load_dotenv_file:
            load_env()
        return cls(
            tmdb_api_key=env_str("TMDB_API_KEY"),
            tmdb_base_url=(env_str("TMDB_BASE_URL") or TMDB_API_BASE_URL).rstrip("/"),
            request_timeout_seconds=env_float("TMDB_REQUEST_TIMEOUT", TMDB_REQUEST_TIMEOUT_SECONDS),
            results_per_page=env_int("RESULTS_PER_PAGE", RESULTS_PER_PAGE),
            tmdb_results_per_page=env_int("TMDB_RESULTS_PER_PAGE", TMDB_RESULTS_PER_PAGE),
            detail_limits=DetailLimits(
                max_reviews=env_int("MAX_REVIEWS", MAX_REVIEWS),
                max_backdrops=env_int("MAX_BACKDROPS", MAX_BACKDROPS),
                max_posters=env_int("MAX_POSTERS", MAX_POSTERS),
            ),
        )
