"""Admin role management. Every route requires ROLE_ADMIN."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notes_api.api.v1.auth import require_admin
from notes_api.core.database import get_db
from notes_api.schemas.auth import CurrentUser
from notes_api.schemas.user import UserResponse, UserRolesRequest
from notes_api.services import users as user_service

router = APIRouter()


@router.put("/users/{user_id}/roles", response_model=UserResponse)
def update_user_roles(
    user_id: int,
    body: UserRolesRequest,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """Replace all roles of a user, e.g. {"roles": ["ROLE_USER", "ROLE_MANAGER"]}."""
    return user_service.update_user_roles(db, admin, user_id, body.roles)


@router.post("/users/{user_id}/roles/{role}", response_model=UserResponse)
def add_role_to_user(
    user_id: int,
    role: str,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """Add one role, keeping existing ones. Example: POST /admin/users/1/roles/ROLE_ADMIN"""
    return user_service.add_user_role(db, admin, user_id, role)


@router.delete("/users/{user_id}/roles/{role}", response_model=UserResponse)
def remove_role_from_user(
    user_id: int,
    role: str,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    """Remove one role. ROLE_USER cannot be removed when it is the only role."""
    return user_service.remove_user_role(db, admin, user_id, role)
