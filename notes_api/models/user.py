"""ORM models for user accounts and their roles (auth and RBAC)."""

from collections.abc import Iterable

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from notes_api.models.base import Base, utcnow
from notes_api.models.role import Role


class UserRole(Base):
    """One role granted to one user; (user_id, role) is the primary key."""

    __tablename__ = "user_roles"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role = Column(String(32), primary_key=True)


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    roles: non-empty set of Role wire names (ROLE_USER, ROLE_ADMIN, ...)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    role_rows = relationship(
        "UserRole",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    notes = relationship("Note", back_populates="owner")
    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def roles(self) -> set[str]:
        return {row.role for row in self.role_rows}

    def set_roles(self, roles: Iterable[Role | str]) -> None:
        """Replace the role set, touching only rows that actually change."""
        wanted = {Role(r).value for r in roles}
        if not wanted:
            raise ValueError("A user must keep at least one role")
        self.role_rows = [row for row in self.role_rows if row.role in wanted]
        present = {row.role for row in self.role_rows}
        for name in sorted(wanted - present):
            self.role_rows.append(UserRole(role=name))

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
