"""Pydantic request/response schemas."""

from notes_api.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    MessageResponse,
    RefreshTokenRequest,
    TokenPairResponse,
    UserInfo,
)
from notes_api.schemas.error import ErrorResponse
from notes_api.schemas.health import HealthResponse
from notes_api.schemas.note import NoteCreateRequest, NoteResponse, NoteUpdateRequest
from notes_api.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UserRolesRequest,
    UserUpdateRequest,
)

__all__ = [
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "MessageResponse",
    "NoteCreateRequest",
    "NoteResponse",
    "NoteUpdateRequest",
    "RefreshTokenRequest",
    "TokenPairResponse",
    "UserCreateRequest",
    "UserInfo",
    "UserResponse",
    "UserRolesRequest",
    "UserUpdateRequest",
]
