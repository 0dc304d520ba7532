"""
Movie list pagination on top of TMDb's list endpoints.

The app serves `RESULTS_PER_PAGE` movies per page while TMDb serves
`TMDB_RESULTS_PER_PAGE`. An app page maps onto a window inside one TMDb page,
or across consecutive TMDb pages when the sizes don't divide evenly.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from movies_backend.config import RESULTS_PER_PAGE, TMDB_RESULTS_PER_PAGE
from movies_backend.errors import PageValidationError
from movies_backend.integrations.tmdb.client import TmdbClient
from movies_backend.integrations.tmdb.schemas import TmdbMovieListItem, TmdbMovieListPage, parse_payload
from movies_backend.locales import resolve_locale
from movies_backend.models.movies import MoviesPage, MovieSummary

logger = logging.getLogger(__name__)

# ASCII digits with an optional all-zero fraction ("5", "5.0").
_PAGE_PATTERN = re.compile(r"(\d+)(?:\.0+)?", re.ASCII)


@dataclass(frozen=True)
class PageWindow:
    """Slice of TMDb results backing one app page."""

    upstream_page: int
    offset: int
    length: int
    upstream_pages: int = 1

    @property
    def last_upstream_page(self) -> int:
        return self.upstream_page + self.upstream_pages - 1


def validate_page(value: Any) -> int:
    """
    Return `value` as a positive int or raise `PageValidationError`.

    Integral numbers and plain ASCII digit strings (`2`, `2.0`, `"2"`) are accepted;
    fractions, exponents, digit separators, non-ASCII digits, booleans, NaN/inf and
    values below 1 are rejected.
    """

    if isinstance(value, bool):
        raise PageValidationError(value)

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise PageValidationError(value)
        number = int(value)
    elif isinstance(value, str):
        match = _PAGE_PATTERN.fullmatch(value.strip())
        if match is None:
            raise PageValidationError(value)
        number = int(match.group(1))
    else:
        raise PageValidationError(value)

    if number < 1:
        raise PageValidationError(value)
    return number


def compute_page_window(
    page: int,
    page_size: int = RESULTS_PER_PAGE,
    upstream_page_size: int = TMDB_RESULTS_PER_PAGE,
) -> PageWindow:
    """
    Map a 1-based app page onto TMDb pages.

    With the default sizes (10 / 20): page 1 -> TMDb page 1 offset 0, page 2 ->
    TMDb page 1 offset 10, page 3 -> TMDb page 2 offset 0.
    """

    if page_size < 1 or upstream_page_size < 1:
        raise ValueError("Page sizes must be positive integers.")
    page = validate_page(page)

    start = (page - 1) * page_size
    offset = start % upstream_page_size
    return PageWindow(
        upstream_page=start // upstream_page_size + 1,
        offset=offset,
        length=page_size,
        upstream_pages=math.ceil((offset + page_size) / upstream_page_size),
    )


def compute_total_pages(total_results: int, page_size: int = RESULTS_PER_PAGE) -> int:
    return math.ceil(max(total_results, 0) / page_size)


def _to_summary(item: TmdbMovieListItem) -> MovieSummary:
    return MovieSummary(
        id=item.id,
        title=item.title,
        poster_path=item.poster_path,
        release_date=item.release_date,
        vote_average=item.vote_average,
    )


def _fetch_upstream_page(client: TmdbClient, *, query: str, page: int, locale: str) -> TmdbMovieListPage:
    if query:
        payload = client.search_movies(query, page=page, language=locale)
    else:
        payload = client.discover_movies(page=page, language=locale)
    return parse_payload(TmdbMovieListPage, payload, context="movie list")


def list_movies(
    client: TmdbClient,
    *,
    page: Any = 1,
    search: str | None = "",
    language: str | None = None,
    page_size: int = RESULTS_PER_PAGE,
    upstream_page_size: int = TMDB_RESULTS_PER_PAGE,
) -> MoviesPage:
    """
    Return one app page of movies.

    An empty (or whitespace-only) `search` browses `/discover/movie`; anything else
    searches `/search/movie` with the trimmed text.
    """

    page_number = validate_page(1 if page is None else page)
    window = compute_page_window(page_number, page_size, upstream_page_size)
    query = (search or "").strip()
    locale = resolve_locale(language)

    first = _fetch_upstream_page(client, query=query, page=window.upstream_page, locale=locale)
    items = list(first.results)
    last_batch = len(first.results)

    for upstream_page in range(window.upstream_page + 1, window.last_upstream_page + 1):
        if last_batch < upstream_page_size:
            break
        if first.total_pages and upstream_page > first.total_pages:
            break
        logger.debug("Movie list window spans TMDb page %s", upstream_page)
        following = _fetch_upstream_page(client, query=query, page=upstream_page, locale=locale)
        items.extend(following.results)
        last_batch = len(following.results)

    window_items = items[window.offset : window.offset + window.length]
    return MoviesPage(
        results=[_to_summary(item) for item in window_items],
        page=page_number,
        total_pages=compute_total_pages(first.total_results, page_size),
        total_results=first.total_results,
    )
