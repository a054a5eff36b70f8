"""
FastAPI dependencies shared by the v1 endpoints.

The ``SongService`` is built once by the application factory and kept
on ``app.state``; handlers receive it through ``get_song_service``.
"""

from fastapi import Request

from song_library_api.app.services.song_service import SongService


def get_song_service(request: Request) -> SongService:
    return request.app.state.song_service
