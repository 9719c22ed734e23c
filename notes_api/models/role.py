"""Closed set of account roles and their wire names."""

from enum import Enum


class Role(str, Enum):
    """
    Capability tier attached to an account.

    BASE: create and manage own notes.
    ADMIN: full access; manages users and roles.
    MANAGER: reads every note, writes only its own.
    VIEWER: read-only.
    """

    BASE = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"
    MANAGER = "ROLE_MANAGER"
    VIEWER = "ROLE_VIEWER"

    @classmethod
    def from_name(cls, name: str) -> "Role | None":
        for role in cls:
            if role.value == name:
                return role
        return None

    @classmethod
    def names(cls) -> list[str]:
        return [role.value for role in cls]
