"""
Storage gateways.

``base.SongRepository`` is the storage-agnostic contract the service
layer depends on; ``song_repository.SQLiteSongRepository`` implements
it on top of SQLite.
"""
