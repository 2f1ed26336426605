"""
api/routes/health.py
--------------------
Health-check endpoint for load balancers and container orchestrators.
"""
from __future__ import annotations

from fastapi import APIRouter

from sojou import __version__

router = APIRouter()


@router.get("/health", summary="Health check")
def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok", "service": "sojou-backend", "version": __version__}
