"""
Service layer for the song catalog.

``SongService`` is the only surface the HTTP layer talks to.  It
forwards each operation to a :class:`SongRepository` and is the place
where cross-cutting concerns (validation of raw mappings, logging of
mutations) live, so storage code never has to change for them.

Errors from the repository pass through unchanged; they are already
part of the ``core.exceptions`` taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel

from song_library_api.app.core.exceptions import ValidationError
from song_library_api.app.repositories.base import SongRepository
from song_library_api.app.schemas.song import SongCreate, SongRead, SongUpdate

M = TypeVar("M", bound=BaseModel)


class SongService:
    """Service class for managing songs."""

    def __init__(self, repository: SongRepository, logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    def list_songs(self) -> List[SongRead]:
        return self.repository.list()

    def get_song(self, song_id: int) -> SongRead:
        return self.repository.get_by_id(song_id)

    def add_song(self, song: Union[SongCreate, Mapping[str, Any]]) -> SongRead:
        """Create a song and return the stored record.

        ``song`` may be a ``SongCreate`` or a plain mapping, which is
        validated first.
        """
        created = self.repository.create(self._coerce(song, SongCreate))
        self.logger.info("Created song %s (%s - %s)", created.id, created.group_name, created.song_name)
        return created

    def update_song(self, song_id: int, changes: Union[SongUpdate, Mapping[str, Any]]) -> SongRead:
        """Apply a partial update and return the refreshed song."""
        changes = self._coerce(changes, SongUpdate)
        self.repository.update(song_id, changes)
        self.logger.info("Updated song %s: %s", song_id, sorted(changes.changes()))
        return self.repository.get_by_id(song_id)

    def delete_song(self, song_id: int) -> None:
        self.repository.delete(song_id)
        self.logger.info("Deleted song %s", song_id)

    @staticmethod
    def _coerce(payload: Union[M, Mapping[str, Any]], model: Type[M]) -> M:
        if isinstance(payload, model):
            return payload
        if not isinstance(payload, Mapping):
            raise ValidationError(f"expected an object, got {type(payload).__name__}")
        try:
            return model.model_validate(dict(payload))
        except pydantic.ValidationError as exc:
            raise ValidationError(str(exc)) from exc
