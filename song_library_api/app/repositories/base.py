from abc import ABC, abstractmethod
from typing import List

from song_library_api.app.schemas.song import SongCreate, SongRead, SongUpdate


class SongRepository(ABC):
    """Storage contract for songs.

    Implementations raise ``NotFoundError`` for missing ids and wrap
    every driver failure in ``StorageError``.
    """

    @abstractmethod
    def list(self) -> List[SongRead]:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, song_id: int) -> SongRead:
        raise NotImplementedError

    @abstractmethod
    def create(self, song: SongCreate) -> SongRead:
        raise NotImplementedError

    @abstractmethod
    def update(self, song_id: int, changes: SongUpdate) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, song_id: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release the underlying connection, if any."""
