"""User accounts: registration, self-service profile operations and admin role management."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notes_api.core.database import LIKE_ESCAPE, escape_like
from notes_api.core.exceptions import ConflictError, NotFoundError
from notes_api.core.security import hash_password
from notes_api.models import Role, User
from notes_api.schemas.auth import CurrentUser
from notes_api.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from notes_api.services import authorization as policy
from notes_api.services.validation import (
    raise_if_invalid,
    validate_user_create,
    validate_user_update,
)

logger = logging.getLogger(__name__)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=sorted(user.roles),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    return user


def _ensure_email_free(db: Session, email: str, exclude_id: int | None = None) -> None:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(f"User already exists with email: {email}")


def _commit(db: Session, email: str | None = None) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"User already exists with email: {email}", cause=e) from e


def register_user(db: Session, body: UserCreateRequest) -> UserResponse:
    """Public registration. New accounts start with the base role only."""
    raise_if_invalid(validate_user_create(body.name, body.email, body.password))
    _ensure_email_free(db, body.email)
    user = User(
        name=body.name.strip(),
        email=body.email,
        password_hash=hash_password(body.password),
    )
    user.set_roles([Role.BASE])
    db.add(user)
    _commit(db, body.email)
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return to_user_response(user)


def list_users(db: Session, current: CurrentUser, name: str | None = None) -> list[UserResponse]:
    """All users (admin only), optionally filtered by a case-insensitive name fragment."""
    policy.ensure_admin(current)
    query = db.query(User)
    if name:
        query = query.filter(User.name.ilike(f"%{escape_like(name)}%", escape=LIKE_ESCAPE))
    return [to_user_response(u) for u in query.order_by(User.id).all()]


def get_user(db: Session, current: CurrentUser, user_id: int) -> UserResponse:
    policy.ensure_admin_or_owner(current, user_id)
    return to_user_response(get_user_or_404(db, user_id))


def update_user(
    db: Session, current: CurrentUser, user_id: int, body: UserUpdateRequest
) -> UserResponse:
    """Partial profile update by the owner or an admin. Roles are not touched here."""
    policy.ensure_admin_or_owner(current, user_id)
    raise_if_invalid(validate_user_update(body.name, body.email, body.password))
    user = get_user_or_404(db, user_id)

    if body.name is not None:
        user.name = body.name.strip()
    if body.email is not None and body.email != user.email:
        _ensure_email_free(db, body.email, exclude_id=user.id)
        user.email = body.email
    if body.password is not None:
        user.password_hash = hash_password(body.password)

    _commit(db, body.email)
    db.refresh(user)
    return to_user_response(user)


def delete_user(db: Session, current: CurrentUser, user_id: int) -> None:
    """
    Admin only. Refresh tokens are deleted with the account; its notes remain
    as orphans that only an admin can modify.
    """
    policy.ensure_admin(current)
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id, "deleted_by": current.id})


def _apply_roles(db: Session, user: User, roles: set[Role], current: CurrentUser) -> UserResponse:
    before = sorted(user.roles)
    user.set_roles(roles)
    db.commit()
    db.refresh(user)
    logger.info(
        "User roles changed",
        extra={
            "user_id": user.id,
            "changed_by": current.id,
            "roles_before": before,
            "roles_after": sorted(user.roles),
        },
    )
    return to_user_response(user)


def update_user_roles(
    db: Session, current: CurrentUser, user_id: int, names: list[str]
) -> UserResponse:
    policy.ensure_admin(current)
    user = get_user_or_404(db, user_id)
    return _apply_roles(db, user, policy.replace_roles(names), current)


def add_user_role(db: Session, current: CurrentUser, user_id: int, role: str) -> UserResponse:
    policy.ensure_admin(current)
    user = get_user_or_404(db, user_id)
    return _apply_roles(db, user, policy.add_role(user.roles, role), current)


def remove_user_role(db: Session, current: CurrentUser, user_id: int, role: str) -> UserResponse:
    policy.ensure_admin(current)
    user = get_user_or_404(db, user_id)
    return _apply_roles(db, user, policy.remove_role(user.roles, role), current)
