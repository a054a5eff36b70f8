"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should override these via environment variables; the
application never reads ``.env`` files on its own, so use your process
manager (Docker, systemd, Pterodactyl) to inject them.

Database settings are bundled into a :class:`ConnectionParameters`
value by :meth:`Settings.connection_parameters` and handed to the
storage layer as an opaque object.
"""

import os
from dataclasses import dataclass, field

from .db import ConnectionParameters


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read when the instance is created (not at import time),
    so tests can patch the environment and build a fresh ``Settings``.
    """

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Song Library API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    # Optional path for a log file in addition to the console handler.
    log_file: str = field(default_factory=lambda: _env("LOG_FILE", ""))

    # Connection parameters for the song store.  With the SQLite driver
    # only ``db_name`` is used to locate the database file; host, port
    # and credentials are kept for log context and for drivers that
    # need them.
    db_host: str = field(default_factory=lambda: _env("DB_HOST", "localhost"))
    db_port: int = field(default_factory=lambda: int(_env("DB_PORT", "5432")))
    db_user: str = field(default_factory=lambda: _env("DB_USER", ""))
    db_password: str = field(default_factory=lambda: _env("DB_PASSWORD", ""))
    db_name: str = field(default_factory=lambda: _env("DB_NAME", "song_library.db"))

    server_host: str = field(default_factory=lambda: _env("SERVER_HOST", "0.0.0.0"))
    server_port: int = field(default_factory=lambda: int(_env("SERVER_PORT", "8080")))

    def connection_parameters(self) -> ConnectionParameters:
        """Return the database settings as a single connection value."""
        return ConnectionParameters(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            database=self.db_name,
        )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
