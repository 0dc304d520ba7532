"""
TMDb integration client and upstream payload schemas.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movies_backend.integrations.tmdb.client import (
        TmdbClient,
        TmdbClientError,
        TmdbConfigurationError,
        TmdbNotFoundError,
        TmdbTimeoutError,
    )

__all__ = [
    "TmdbClient",
    "TmdbClientError",
    "TmdbConfigurationError",
    "TmdbNotFoundError",
    "TmdbTimeoutError",
]


def __getattr__(name: str):
    if name in __all__:
        from movies_backend.integrations.tmdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
