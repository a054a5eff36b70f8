"""
Top-level router for version 1 of the API.

Static routing table: ``/songs`` maps to the five catalog operations
defined in ``endpoints/songs.py``.
"""

from fastapi import APIRouter

from .endpoints import songs

router = APIRouter()

router.include_router(songs.router, prefix="/songs", tags=["songs"])
