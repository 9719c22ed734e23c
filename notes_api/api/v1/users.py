"""User endpoints: public registration plus admin/owner profile operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from notes_api.api.v1.auth import get_current_user
from notes_api.core.database import get_db
from notes_api.schemas.auth import CurrentUser
from notes_api.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from notes_api.services import users as user_service

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Register a new account (no authentication required). Starts with ROLE_USER."""
    return user_service.register_user(db, body)


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    name: Annotated[str | None, Query(description="Case-insensitive name filter")] = None,
) -> list[UserResponse]:
    """List users (admin only)."""
    return user_service.list_users(db, current_user, name)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Get a user (admin, or the user themself)."""
    return user_service.get_user(db, current_user, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Partially update name, email or password (admin, or the user themself)."""
    return user_service.update_user(db, current_user, user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> None:
    """Delete a user (admin only). Their notes are kept without an owner."""
    user_service.delete_user(db, current_user, user_id)
