"""
Access-control policy: role model, role-set mutation rules and ownership checks.

Every decision is a pure predicate over (caller, caller roles, resource owner).
Services call the ensure_* helpers before they mutate state; the helpers turn a
negative decision into AccessDeniedError.
"""

import logging
from collections.abc import Iterable

from notes_api.core.exceptions import AccessDeniedError, InvalidRoleError
from notes_api.models.role import Role
from notes_api.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

READ_ALL_ROLES = frozenset({Role.ADMIN.value, Role.MANAGER.value})
WRITE_ROLES = frozenset({Role.ADMIN.value, Role.MANAGER.value, Role.BASE.value})


def is_admin(user: CurrentUser) -> bool:
    return user.has_role(Role.ADMIN.value)


def can_read_all(user: CurrentUser) -> bool:
    """ADMIN and MANAGER may read any resource."""
    return bool(user.roles & READ_ALL_ROLES)


def can_read(user: CurrentUser, owner_id: int | None) -> bool:
    return can_read_all(user) or (owner_id is not None and owner_id == user.id)


def can_create(user: CurrentUser) -> bool:
    """VIEWER-only accounts are read-only."""
    return bool(user.roles & WRITE_ROLES)


def can_mutate(user: CurrentUser, owner_id: int | None) -> bool:
    """
    ADMIN may update/delete anything. Everyone else only what they own.
    A resource without an owner is therefore admin-only, MANAGER included.
    """
    if is_admin(user):
        return True
    return owner_id is not None and owner_id == user.id


def is_owner(user: CurrentUser | None, account_id: int | None) -> bool:
    """True iff the authenticated caller is the given account. Never raises."""
    try:
        return user is not None and account_id is not None and user.id == int(account_id)
    except (TypeError, ValueError):
        return False


def ensure_admin(user: CurrentUser) -> None:
    if not is_admin(user):
        logger.warning("Admin access denied", extra={"user_id": user.id})
        raise AccessDeniedError("Admin access required")


def ensure_admin_or_owner(user: CurrentUser, account_id: int) -> None:
    if not (is_admin(user) or is_owner(user, account_id)):
        logger.warning(
            "Account access denied",
            extra={"user_id": user.id, "account_id": account_id},
        )
        raise AccessDeniedError()


def ensure_can_read_all(user: CurrentUser) -> None:
    if not can_read_all(user):
        raise AccessDeniedError()


def ensure_can_read(user: CurrentUser, owner_id: int | None) -> None:
    if not can_read(user, owner_id):
        logger.warning(
            "Read denied",
            extra={"user_id": user.id, "owner_id": owner_id},
        )
        raise AccessDeniedError()


def ensure_can_create(user: CurrentUser) -> None:
    if not can_create(user):
        raise AccessDeniedError()


def ensure_can_mutate(user: CurrentUser, owner_id: int | None) -> None:
    if not can_mutate(user, owner_id):
        logger.warning(
            "Mutation denied",
            extra={"user_id": user.id, "owner_id": owner_id},
        )
        raise AccessDeniedError()


# --- role-set rules ---------------------------------------------------------


def parse_role(name: str) -> Role:
    role = Role.from_name(name)
    if role is None:
        raise InvalidRoleError(
            f"Invalid role: {name}. Valid roles are: {', '.join(Role.names())}"
        )
    return role


def replace_roles(names: Iterable[str]) -> set[Role]:
    """
    New role set for a full replacement. Every name must be a known role;
    an empty request falls back to the base role so the set is never empty.
    """
    roles = {parse_role(name) for name in names}
    return roles or {Role.BASE}


def add_role(current: Iterable[str], name: str) -> set[Role]:
    roles = {Role(r) for r in current}
    roles.add(parse_role(name))
    return roles


def remove_role(current: Iterable[str], name: str) -> set[Role]:
    """
    Removing the base role when it is the only role is rejected. Removing any
    other last role re-adds the base role. Removing a role the account does
    not hold is a no-op.
    """
    role = parse_role(name)
    roles = {Role(r) for r in current}
    if role not in roles:
        return roles
    if role is Role.BASE and roles == {Role.BASE}:
        raise InvalidRoleError(
            f"Cannot remove {Role.BASE.value} when it's the only role. "
            "User must have at least one role."
        )
    roles.discard(role)
    return roles or {Role.BASE}
