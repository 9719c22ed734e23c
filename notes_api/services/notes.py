"""Notes: the access-controlled resource. Every operation consults the authorization policy first."""

from sqlalchemy.orm import Session

from notes_api.core.database import LIKE_ESCAPE, escape_like
from notes_api.core.exceptions import NotFoundError
from notes_api.models import Note
from notes_api.schemas.auth import CurrentUser
from notes_api.schemas.note import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from notes_api.services import authorization as policy
from notes_api.services.validation import (
    raise_if_invalid,
    validate_note_create,
    validate_note_update,
)


def to_note_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        owner_id=note.owner_id,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


def _get_note_or_404(db: Session, note_id: int) -> Note:
    note = db.get(Note, note_id)
    if note is None:
        raise NotFoundError(f"Note not found with id: {note_id}")
    return note


def list_notes(db: Session, current: CurrentUser, title: str | None = None) -> list[NoteResponse]:
    """Every note (ADMIN and MANAGER only)."""
    policy.ensure_can_read_all(current)
    query = db.query(Note)
    if title:
        query = query.filter(Note.title.ilike(f"%{escape_like(title)}%", escape=LIKE_ESCAPE))
    return [to_note_response(n) for n in query.order_by(Note.id).all()]


def list_my_notes(db: Session, current: CurrentUser, title: str | None = None) -> list[NoteResponse]:
    query = db.query(Note).filter(Note.owner_id == current.id)
    if title:
        query = query.filter(Note.title.ilike(f"%{escape_like(title)}%", escape=LIKE_ESCAPE))
    return [to_note_response(n) for n in query.order_by(Note.id).all()]


def get_note(db: Session, current: CurrentUser, note_id: int) -> NoteResponse:
    note = _get_note_or_404(db, note_id)
    policy.ensure_can_read(current, note.owner_id)
    return to_note_response(note)


def create_note(db: Session, current: CurrentUser, body: NoteCreateRequest) -> NoteResponse:
    policy.ensure_can_create(current)
    raise_if_invalid(validate_note_create(body.title, body.content))
    note = Note(title=body.title, content=body.content, owner_id=current.id)
    db.add(note)
    db.commit()
    db.refresh(note)
    return to_note_response(note)


def update_note(
    db: Session, current: CurrentUser, note_id: int, body: NoteUpdateRequest
) -> NoteResponse:
    note = _get_note_or_404(db, note_id)
    policy.ensure_can_mutate(current, note.owner_id)
    raise_if_invalid(validate_note_update(body.title, body.content))
    if body.title is not None:
        note.title = body.title
    if body.content is not None:
        note.content = body.content
    db.commit()
    db.refresh(note)
    return to_note_response(note)


def delete_note(db: Session, current: CurrentUser, note_id: int) -> None:
    note = _get_note_or_404(db, note_id)
    policy.ensure_can_mutate(current, note.owner_id)
    db.delete(note)
    db.commit()
