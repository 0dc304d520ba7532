"""
Dependency injection for settings and the TMDb client.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Iterator

from fastapi import Depends

from movies_backend.config import Settings
from movies_backend.integrations.tmdb.client import TmdbClient

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, built once from the environment (and `.env`).
    """
    return Settings.from_env()


def get_tmdb_client(settings: Annotated[Settings, Depends(get_settings)]) -> Iterator[TmdbClient]:
    """
    Yields a request-scoped TMDb client; its HTTP session is closed after the response.
    """
    client = TmdbClient(settings)
    try:
        yield client
    finally:
        client.close()


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Tmdb = Annotated[TmdbClient, Depends(get_tmdb_client)]
