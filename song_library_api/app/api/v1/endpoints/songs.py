"""
Song endpoints for API v1.

These routes expose the song catalog: list, retrieve, create, update
and delete.  Successful responses are wrapped as ``{"data": ...}``.
Failures are raised as ``core.exceptions`` errors and rendered by the
application's exception handlers as ``{"error": ..., "details": ...}``;
a missing song yields 404 and a malformed payload yields 400.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from song_library_api.app.api.dependencies import get_song_service
from song_library_api.app.schemas.song import (
    DataResponse,
    ErrorResponse,
    MessageData,
    SongCreate,
    SongRead,
    SongUpdate,
)
from song_library_api.app.services.song_service import SongService

router = APIRouter(
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    }
)

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.get("", response_model=DataResponse[List[SongRead]])
@router.get("/", response_model=DataResponse[List[SongRead]], include_in_schema=False)
async def list_songs(service: SongService = Depends(get_song_service)) -> dict:
    """Return all songs, ordered by ``id``."""
    return {"data": service.list_songs()}


@router.get("/{song_id}", response_model=DataResponse[SongRead], responses=NOT_FOUND)
async def get_song(song_id: int, service: SongService = Depends(get_song_service)) -> dict:
    """Retrieve a single song by its ID."""
    return {"data": service.get_song(song_id)}


@router.post("", response_model=DataResponse[SongRead], status_code=status.HTTP_201_CREATED)
@router.post(
    "/",
    response_model=DataResponse[SongRead],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def add_song(song: SongCreate, service: SongService = Depends(get_song_service)) -> dict:
    """Create a new song.

    All fields are optional; ``id``, ``created_at`` and ``updated_at``
    are assigned by the store and ignored if sent.
    """
    return {"data": service.add_song(song)}


@router.put("/{song_id}", response_model=DataResponse[SongRead], responses=NOT_FOUND)
async def update_song(
    song_id: int,
    changes: SongUpdate,
    service: SongService = Depends(get_song_service),
) -> dict:
    """Update an existing song.

    Only fields present in the body with a non-null value are changed;
    send an empty string to clear a text field.
    """
    return {"data": service.update_song(song_id, changes)}


@router.delete("/{song_id}", response_model=DataResponse[MessageData], responses=NOT_FOUND)
async def delete_song(song_id: int, service: SongService = Depends(get_song_service)) -> dict:
    """Delete a song by its ID."""
    service.delete_song(song_id)
    return {"data": {"message": "Song deleted successfully"}}
