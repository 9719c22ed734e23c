"""SQLAlchemy ORM models."""

from notes_api.models.base import Base
from notes_api.models.note import Note
from notes_api.models.refresh_token import RefreshToken
from notes_api.models.role import Role
from notes_api.models.user import User, UserRole

__all__ = ["Base", "Note", "RefreshToken", "Role", "User", "UserRole"]
