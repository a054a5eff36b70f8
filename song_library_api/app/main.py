"""
Main entrypoint for the Song Library API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn song_library_api.app.main:app --reload

The database connection is opened when the application starts.  If the
store is unreachable or the schema cannot be applied, startup fails
and the server does not begin serving.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.exceptions import (
    SongLibraryException,
    request_validation_exception_handler,
    song_library_exception_handler,
)
from .core.logging_config import setup_logging
from .repositories.base import SongRepository
from .repositories.song_repository import SQLiteSongRepository
from .services.song_service import SongService


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[SongRepository] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the process-wide ``settings``.
    repository : Optional[SongRepository]
        A ready repository.  When given, the application uses it as is
        and does not open or close a database connection itself.  Tests
        use this to run against an in-memory store.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)
    logger = logging.getLogger("song_library_api")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = repository is None
        repo = repository or SQLiteSongRepository.initialize(
            settings.connection_parameters(),
            logger=logging.getLogger("song_library_api.repository"),
        )
        app.state.song_service = SongService(repo, logger=logging.getLogger("song_library_api.service"))
        logger.info("%s %s ready", settings.project_name, settings.api_version)
        try:
            yield
        finally:
            if owned:
                repo.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    if repository is not None:
        # Available even when the lifespan is not run (e.g. TestClient
        # used without a ``with`` block).
        app.state.song_service = SongService(repository, logger=logging.getLogger("song_library_api.service"))

    app.add_exception_handler(SongLibraryException, song_library_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
