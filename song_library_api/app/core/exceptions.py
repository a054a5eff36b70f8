"""
Error taxonomy for the song catalog and its HTTP mapping.

The storage and service layers raise only the exceptions defined here,
never raw ``sqlite3`` errors.  Each exception carries the HTTP status
it maps to, so the handlers at the bottom of this module can turn any
of them into the API error body ``{"error": ..., "details": ...}``.
"""

import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SongLibraryException(Exception):
    """Base exception for the Song Library API."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message, "details": self.details}


class StorageConnectionError(SongLibraryException):
    """Store unreachable or schema bootstrap failed.  Fatal at startup."""


class StorageError(SongLibraryException):
    """Any store failure other than a missing record."""

    def __init__(self, operation: str, cause: Exception, song_id: Optional[int] = None):
        target = f" {song_id}" if song_id is not None else ""
        super().__init__(f"Failed to {operation}{target}", details=str(cause))
        self.operation = operation
        self.song_id = song_id


class NotFoundError(SongLibraryException):
    """Raised when a song ID doesn't exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, song_id: int):
        super().__init__("Song not found", details=f"no song with id {song_id}")
        self.song_id = song_id


class ValidationError(SongLibraryException):
    """Malformed input detected before reaching storage."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, details: str, message: str = "Invalid request payload"):
        super().__init__(message, details=details)


# =============================================================================
# Exception Handlers
# =============================================================================

async def song_library_exception_handler(
    request: Request, exc: SongLibraryException
) -> JSONResponse:
    """Convert a ``SongLibraryException`` to a JSON error response."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request binding failures (bad body, bad path id) as 400."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationError(problems).to_dict(),
    )
