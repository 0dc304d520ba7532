"""
Strict schemas for the TMDb payloads this service consumes.

TMDb omits fields or sends `null` freely. Every model here declares which fields
are nullable; for the rest a missing or `null` value falls back to the field
default (`overview -> ""`, `runtime -> 0`, lists -> `[]`, ...). Unknown fields
are ignored.
"""
from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from movies_backend.integrations.tmdb.client import TmdbClientError

ModelT = TypeVar("ModelT", bound=BaseModel)


class TmdbModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)


# --- list endpoints (/discover/movie, /search/movie) ---

class TmdbMovieListItem(TmdbModel):
    id: int
    title: str = ""
    poster_path: str | None = None
    release_date: str = ""
    vote_average: float = 0.0


class TmdbMovieListPage(TmdbModel):
    page: int = 1
    results: list[TmdbMovieListItem] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


# --- /movie/{id} with appended sub-resources ---

class TmdbGenre(TmdbModel):
    id: int
    name: str = ""


class TmdbCastMember(TmdbModel):
    id: int
    name: str = ""
    character: str = ""
    profile_path: str | None = None
    order: int = 0


class TmdbCrewMember(TmdbModel):
    id: int
    name: str = ""
    job: str = ""
    department: str = ""
    profile_path: str | None = None


class TmdbCredits(TmdbModel):
    cast: list[TmdbCastMember] = Field(default_factory=list)
    crew: list[TmdbCrewMember] = Field(default_factory=list)


class TmdbVideo(TmdbModel):
    id: str
    key: str = ""
    name: str = ""
    site: str = ""
    type: str = ""
    official: bool = False


class TmdbVideos(TmdbModel):
    results: list[TmdbVideo] = Field(default_factory=list)


class TmdbReviewAuthor(TmdbModel):
    username: str = ""
    avatar_path: str | None = None
    rating: float | None = None


class TmdbReview(TmdbModel):
    id: str
    author: str = ""
    content: str = ""
    created_at: str = ""
    author_details: TmdbReviewAuthor = Field(default_factory=TmdbReviewAuthor)


class TmdbReviews(TmdbModel):
    results: list[TmdbReview] = Field(default_factory=list)


class TmdbImage(TmdbModel):
    file_path: str
    width: int = 0
    height: int = 0
    vote_average: float = 0.0


class TmdbImages(TmdbModel):
    backdrops: list[TmdbImage] = Field(default_factory=list)
    posters: list[TmdbImage] = Field(default_factory=list)


class TmdbMovieDetail(TmdbModel):
    id: int
    title: str = ""
    overview: str = ""
    runtime: int = 0
    release_date: str = ""
    vote_average: float = 0.0
    poster_path: str | None = None
    backdrop_path: str | None = None
    genres: list[TmdbGenre] = Field(default_factory=list)
    homepage: str | None = None
    status: str | None = None
    tagline: str | None = None
    credits: TmdbCredits = Field(default_factory=TmdbCredits)
    videos: TmdbVideos = Field(default_factory=TmdbVideos)
    reviews: TmdbReviews = Field(default_factory=TmdbReviews)
    images: TmdbImages = Field(default_factory=TmdbImages)


def parse_payload(model: type[ModelT], payload: dict[str, Any], *, context: str) -> ModelT:
    """Validate a TMDb payload, reporting schema mismatches as an upstream (502) failure."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TmdbClientError(
            f"TMDb returned an unexpected {context} payload.",
            status_code=502,
            body_snippet=str(exc)[:400],
        ) from exc
