"""
Movie detail aggregation.

One TMDb `/movie/{id}` call embeds credits, videos, reviews and images; the
payload is narrowed to display fields and the larger collections are capped.
When a translated overview is missing, a second best-effort call fetches the
default-locale overview.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from movies_backend.config import DetailLimits
from movies_backend.integrations.tmdb.client import TmdbClient, TmdbClientError
from movies_backend.integrations.tmdb.schemas import TmdbImage, TmdbMovieDetail, parse_payload
from movies_backend.locales import DEFAULT_LOCALE, asset_language_filter, is_default_locale, resolve_locale
from movies_backend.models.movies import (
    CastMember,
    CrewMember,
    Genre,
    Image,
    MovieDetail,
    MovieImages,
    Review,
    ReviewAuthor,
    Video,
)

logger = logging.getLogger(__name__)

APPENDED_RESOURCES = ("credits", "videos", "reviews", "images")


class FallbackOutcome(str, Enum):
    NOT_NEEDED = "not_needed"
    APPLIED = "applied"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class OverviewFallback:
    """Result of the default-locale overview lookup."""

    outcome: FallbackOutcome
    overview: str = ""
    error: Exception | None = None

    @property
    def applied(self) -> bool:
        return self.outcome is FallbackOutcome.APPLIED


def needs_overview_fallback(overview: str, locale: str) -> bool:
    return not (overview or "").strip() and not is_default_locale(locale)


def fetch_overview_fallback(client: TmdbClient, movie_id: int | str, *, overview: str, locale: str) -> OverviewFallback:
    """
    Fetch the default-locale overview when the localized one is blank.

    Never raises for upstream failures; they come back as `FallbackOutcome.FAILED`.
    """

    if not needs_overview_fallback(overview, locale):
        return OverviewFallback(FallbackOutcome.NOT_NEEDED)

    try:
        payload = client.fetch_movie_details(movie_id, language=DEFAULT_LOCALE)
        fallback = parse_payload(TmdbMovieDetail, payload, context="movie detail")
    except TmdbClientError as exc:
        return OverviewFallback(FallbackOutcome.FAILED, error=exc)

    if not fallback.overview.strip():
        return OverviewFallback(FallbackOutcome.EMPTY)
    return OverviewFallback(FallbackOutcome.APPLIED, overview=fallback.overview)


def _to_image(image: TmdbImage) -> Image:
    return Image(
        file_path=image.file_path,
        width=image.width,
        height=image.height,
        vote_average=image.vote_average,
    )


def normalize_movie_detail(
    movie: TmdbMovieDetail,
    *,
    overview: str | None = None,
    limits: DetailLimits = DetailLimits(),
) -> MovieDetail:
    """Narrow a TMDb detail payload to the response shape and apply collection caps."""

    cast = sorted(movie.credits.cast, key=lambda member: member.order)
    return MovieDetail(
        id=movie.id,
        title=movie.title,
        overview=movie.overview if overview is None else overview,
        runtime=movie.runtime,
        release_date=movie.release_date,
        vote_average=movie.vote_average,
        poster_path=movie.poster_path,
        backdrop_path=movie.backdrop_path,
        genres=[Genre(id=g.id, name=g.name) for g in movie.genres],
        homepage=movie.homepage,
        status=movie.status,
        tagline=movie.tagline,
        cast=[
            CastMember(
                id=c.id,
                name=c.name,
                character=c.character,
                profile_path=c.profile_path,
                order=c.order,
            )
            for c in cast
        ],
        crew=[
            CrewMember(
                id=c.id,
                name=c.name,
                job=c.job,
                department=c.department,
                profile_path=c.profile_path,
            )
            for c in movie.credits.crew
        ],
        videos=[
            Video(id=v.id, key=v.key, name=v.name, site=v.site, type=v.type, official=v.official)
            for v in movie.videos.results
        ],
        reviews=[
            Review(
                id=r.id,
                author=r.author,
                content=r.content,
                created_at=r.created_at,
                author_details=ReviewAuthor(
                    username=r.author_details.username,
                    avatar_path=r.author_details.avatar_path,
                    rating=r.author_details.rating,
                ),
            )
            for r in movie.reviews.results[: limits.max_reviews]
        ],
        images=MovieImages(
            backdrops=[_to_image(i) for i in movie.images.backdrops[: limits.max_backdrops]],
            posters=[_to_image(i) for i in movie.images.posters[: limits.max_posters]],
        ),
    )


def get_movie_detail(
    client: TmdbClient,
    movie_id: int | str,
    language: str | None = None,
    *,
    limits: DetailLimits = DetailLimits(),
) -> MovieDetail:
    """
    Aggregate a movie's details, credits, videos, reviews and images.

    Upstream errors from the primary call propagate unchanged (a missing movie is a
    `TmdbNotFoundError`). The movie id is passed through as given.
    """

    locale = resolve_locale(language)
    asset_languages = asset_language_filter(locale)
    payload = client.fetch_movie_details(
        movie_id,
        language=locale,
        append_to_response=APPENDED_RESOURCES,
        include_image_language=asset_languages,
        include_video_language=asset_languages,
    )
    movie = parse_payload(TmdbMovieDetail, payload, context="movie detail")

    fallback = fetch_overview_fallback(client, movie_id, overview=movie.overview, locale=locale)
    if fallback.outcome is FallbackOutcome.FAILED:
        logger.warning("Overview fallback for movie %s (%s) failed: %s", movie_id, locale, fallback.error)
    elif fallback.outcome is FallbackOutcome.EMPTY:
        logger.debug("Movie %s has no %s overview either", movie_id, DEFAULT_LOCALE)

    return normalize_movie_detail(
        movie,
        overview=fallback.overview if fallback.applied else None,
        limits=limits,
    )
