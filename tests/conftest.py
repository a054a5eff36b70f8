"""Shared fixtures: an in-memory song store, the service on top of it
and an HTTP client for the application wired to that store."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from song_library_api.app.core.db import ConnectionParameters
from song_library_api.app.main import create_app
from song_library_api.app.repositories.song_repository import SQLiteSongRepository
from song_library_api.app.services.song_service import SongService


@pytest.fixture
def repository() -> SQLiteSongRepository:
    """Create an in-memory database for testing."""
    repo = SQLiteSongRepository.initialize(
        ConnectionParameters(database=":memory:"),
        logger=logging.getLogger("tests.repository"),
    )
    yield repo
    repo.close()


@pytest.fixture
def service(repository: SQLiteSongRepository) -> SongService:
    return SongService(repository, logger=logging.getLogger("tests.service"))


@pytest.fixture
def client(repository: SQLiteSongRepository) -> TestClient:
    """Create an HTTP client for an app backed by the in-memory store."""
    app = create_app(repository=repository)
    with TestClient(app) as client:
        yield client
