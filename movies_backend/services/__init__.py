"""
Request-scoped services behind the movie endpoints.
"""

from movies_backend.services.movie_detail import get_movie_detail
from movies_backend.services.movies_list import compute_page_window, list_movies, validate_page

__all__ = [
    "compute_page_window",
    "get_movie_detail",
    "list_movies",
    "validate_page",
]
