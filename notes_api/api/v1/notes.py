"""Note endpoints. Ownership and role checks happen in the note service."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from notes_api.api.v1.auth import get_current_user
from notes_api.core.database import get_db
from notes_api.schemas.auth import CurrentUser
from notes_api.schemas.note import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from notes_api.services import notes as note_service

router = APIRouter()

TitleFilter = Annotated[str | None, Query(description="Case-insensitive title filter")]


@router.get("", response_model=list[NoteResponse])
def list_notes(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: TitleFilter = None,
) -> list[NoteResponse]:
    """List every note (ROLE_ADMIN or ROLE_MANAGER)."""
    return note_service.list_notes(db, current_user, title)


@router.get("/me", response_model=list[NoteResponse])
def list_my_notes(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: TitleFilter = None,
) -> list[NoteResponse]:
    """List the caller's own notes."""
    return note_service.list_my_notes(db, current_user, title)


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(
    note_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> NoteResponse:
    return note_service.get_note(db, current_user, note_id)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    body: NoteCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> NoteResponse:
    """Create a note owned by the caller."""
    return note_service.create_note(db, current_user, body)


@router.patch("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: int,
    body: NoteUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> NoteResponse:
    """Partially update a note (owner or admin)."""
    return note_service.update_note(db, current_user, note_id, body)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> None:
    """Delete a note (owner or admin)."""
    note_service.delete_note(db, current_user, note_id)
