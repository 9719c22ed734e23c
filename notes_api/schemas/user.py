"""Request/response schemas for user and admin role endpoints."""

from datetime import datetime

from pydantic import Field

from notes_api.schemas.base import CamelModel


class UserCreateRequest(CamelModel):
    """Registration body. Field rules live in services.validation."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdateRequest(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    """User as returned by the API (never includes the password hash)."""

    id: int
    name: str
    email: str
    roles: list[str]
    created_at: datetime
    updated_at: datetime


class UserRolesRequest(CamelModel):
    """Replacement role set for PUT /admin/users/{id}/roles."""

    roles: list[str] = Field(..., description="Role names, e.g. ROLE_USER, ROLE_MANAGER")
