"""
Movie browse endpoints: paginated list/search and aggregated detail.
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from api.deps import AppSettings, Tmdb
from movies_backend.locales import DEFAULT_LANGUAGE
from movies_backend.models.movies import MovieDetail, MoviesPage
from movies_backend.services.movie_detail import get_movie_detail
from movies_backend.services.movies_list import list_movies


router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=MoviesPage)
def list_movies_endpoint(
    tmdb: Tmdb,
    settings: AppSettings,
    page: str = Query(default="1"),
    search: str = Query(default=""),
    lang: str = Query(default=DEFAULT_LANGUAGE),
) -> MoviesPage:
    """
    List movies, 10 per page.
    An empty `search` browses TMDb's discover feed; otherwise it is a title search.
    """
    return list_movies(
        tmdb,
        page=page,
        search=search,
        language=lang,
        page_size=settings.results_per_page,
        upstream_page_size=settings.tmdb_results_per_page,
    )


# `:int` only matches digits, so `/movies/abc` or `/movies/1-2` fall through to a 404.
@router.get("/{movie_id:int}", response_model=MovieDetail)
def get_movie_endpoint(
    tmdb: Tmdb,
    settings: AppSettings,
    movie_id: int,
    lang: str = Query(default=DEFAULT_LANGUAGE),
) -> MovieDetail:
    """Get a movie with credits, videos, reviews and images."""
    return get_movie_detail(tmdb, movie_id, lang, limits=settings.detail_limits)
