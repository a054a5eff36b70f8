"""
Pydantic models for song data.

``SongBase`` holds the caller-editable fields shared by requests and
responses.  ``SongCreate`` is accepted on creation, ``SongUpdate`` on
partial updates, and ``SongRead`` is what the storage layer hands back:
a detached copy of a stored row including the store-managed ``id``
and timestamps.  The envelope models describe the ``{"data": ...}`` and
``{"error": ...}`` bodies used by the HTTP API.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")

TEXT_FIELDS = ("group_name", "song_name", "text", "link")


def _check_encodable(value: Optional[str]) -> Optional[str]:
    """Reject strings that cannot be stored as UTF-8 (e.g. lone surrogates)."""
    if value is not None:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"string is not valid UTF-8: {exc.reason}") from exc
    return value


class SongBase(BaseModel):
    group_name: str = Field("", examples=["Muse"])
    song_name: str = Field("", examples=["Supermassive Black Hole"])
    release_date: Optional[datetime] = Field(None, examples=["2006-06-19T00:00:00Z"])
    text: str = Field("", description="Lyrics or other body text")
    link: str = Field("", examples=["https://www.youtube.com/watch?v=Xsp3_a-PMTw"])

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def check_encodable(cls, value):
        return _check_encodable(value)


class SongCreate(SongBase):
    """Schema for creating a song.  Every field is optional."""
    pass


class SongUpdate(BaseModel):
    """Schema for updating a song.

    All fields are optional.  A field that is present with a non-null
    value replaces the stored one (an empty string clears the field);
    omitted or ``null`` fields are left untouched.  As a consequence a
    ``release_date`` cannot be cleared once set: ``null`` is ignored and
    an empty string is not a valid datetime.
    """

    group_name: Optional[str] = None
    song_name: Optional[str] = None
    release_date: Optional[datetime] = None
    text: Optional[str] = None
    link: Optional[str] = None

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def check_encodable(cls, value):
        return _check_encodable(value)

    def changes(self) -> dict:
        """Return only the fields that should overwrite stored values."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SongRead(SongBase):
    """Schema for reading a song from the API."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class MessageData(BaseModel):
    message: str


class DataResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    data: T


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error: str
    details: Optional[str] = None
