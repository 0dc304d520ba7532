from __future__ import annotations

from pydantic import BaseModel, Field


class MovieSummary(BaseModel):
    id: int
    title: str
    poster_path: str | None
    release_date: str
    vote_average: float


class MoviesPage(BaseModel):
    results: list[MovieSummary]
    page: int
    total_pages: int
    total_results: int


class Genre(BaseModel):
    id: int
    name: str


class CastMember(BaseModel):
    id: int
    name: str
    character: str
    profile_path: str | None
    order: int


class CrewMember(BaseModel):
    id: int
    name: str
    job: str
    department: str
    profile_path: str | None


class Video(BaseModel):
    id: str
    key: str
    name: str
    site: str
    type: str
    official: bool


class ReviewAuthor(BaseModel):
    username: str
    avatar_path: str | None
    rating: float | None


class Review(BaseModel):
    id: str
    author: str
    content: str
    created_at: str
    author_details: ReviewAuthor


class Image(BaseModel):
    file_path: str
    width: int
    height: int
    vote_average: float


class MovieImages(BaseModel):
    backdrops: list[Image] = Field(default_factory=list)
    posters: list[Image] = Field(default_factory=list)


class MovieDetail(BaseModel):
    """Display-ready movie detail; nested collections are already capped."""

    id: int
    title: str
    overview: str
    runtime: int
    release_date: str
    vote_average: float
    poster_path: str | None
    backdrop_path: str | None
    genres: list[Genre]
    homepage: str | None
    status: str | None
    tagline: str | None
    cast: list[CastMember]
    crew: list[CrewMember]
    videos: list[Video]
    reviews: list[Review]
    images: MovieImages
