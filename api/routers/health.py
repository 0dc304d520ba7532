"""
Health check endpoint.
"""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Liveness probe; does not call TMDb."""
    return {
        "ok": True,
        "service": "backend",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
