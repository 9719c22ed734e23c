"""Request/response schemas for note endpoints."""

from datetime import datetime

from notes_api.schemas.base import CamelModel


class NoteCreateRequest(CamelModel):
    title: str | None = None
    content: str | None = None


class NoteUpdateRequest(CamelModel):
    title: str | None = None
    content: str | None = None


class NoteResponse(CamelModel):
    id: int
    title: str
    content: str
    owner_id: int | None
    created_at: datetime
    updated_at: datetime
