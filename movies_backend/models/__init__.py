"""
Response models served by the API.
"""

from movies_backend.models.movies import (
    CastMember,
    CrewMember,
    Genre,
    Image,
    MovieDetail,
    MovieImages,
    MoviesPage,
    MovieSummary,
    Review,
    ReviewAuthor,
    Video,
)

__all__ = [
    "CastMember",
    "CrewMember",
    "Genre",
    "Image",
    "MovieDetail",
    "MovieImages",
    "MovieSummary",
    "MoviesPage",
    "Review",
    "ReviewAuthor",
    "Video",
]
