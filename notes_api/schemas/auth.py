"""Request/response schemas for auth endpoints."""

from pydantic import Field

from notes_api.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password")


class UserInfo(CamelModel):
    """Account summary returned with a successful login."""

    id: int
    name: str
    email: str
    roles: list[str]


class TokenPairResponse(CamelModel):
    """New access + refresh token pair."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token (single use)")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class LoginResponse(TokenPairResponse):
    user: UserInfo


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., description="Refresh token returned by login or refresh")


class LogoutRequest(CamelModel):
    refresh_token: str = Field(..., description="Refresh token to revoke")


class MessageResponse(CamelModel):
    message: str


class CurrentUser(CamelModel):
    """
    Authenticated caller resolved from a bearer token for dependency injection.
    roles are read from the database on every request, not from the token.
    """

    id: int
    email: str
    roles: frozenset[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles
