"""Entry point for the Song Library API.

Launches the FastAPI application with Uvicorn.  Host and port are read
from the ``SERVER_HOST`` and ``SERVER_PORT`` environment variables
(defaults ``0.0.0.0`` and ``8080``); database settings come from the
``DB_*`` variables, see ``song_library_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from song_library_api.app.core.config import settings
from song_library_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.server_host,
        port=settings.server_port,
        reload=False,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger("song_library_api").info(
        "Server is starting on %s:%s", settings.server_host, settings.server_port
    )
    await server.serve()
    if not server.started:
        # The database could not be reached or migrated; do not keep running.
        raise SystemExit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
