"""JWT login/refresh/logout routes and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from notes_api.core.database import get_db
from notes_api.core.exceptions import (
    AuthenticationRequiredError,
    InvalidTokenError,
    NotFoundError,
)
from notes_api.core.security import TOKEN_TYPE_ACCESS, TokenCodec, get_token_codec
from notes_api.models import User
from notes_api.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    MessageResponse,
    RefreshTokenRequest,
    TokenPairResponse,
)
from notes_api.services import authorization as policy
from notes_api.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def authenticate_bearer(token: str, db: Session, codec: TokenCodec) -> CurrentUser:
    """
    Resolve an access token to the calling user.

    Rejects malformed or expired tokens, refresh tokens, and tokens whose
    account no longer exists or whose email no longer matches. Roles come
    from the database so role changes apply on the next request.
    """
    claims = codec.decode(token)
    if codec.is_expired(claims):
        raise InvalidTokenError("Authentication token has expired")
    if claims.token_type != TOKEN_TYPE_ACCESS:
        logger.warning("Rejected non-access token used as bearer credential")
        raise InvalidTokenError()
    user = db.get(User, claims.account_id)
    if user is None or user.email != claims.email:
        logger.warning("Bearer token subject does not match an account", extra={"sub": claims.subject})
        raise InvalidTokenError()
    return CurrentUser(id=user.id, email=user.email, roles=frozenset(user.roles))


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> CurrentUser | None:
    """Dependency: None for anonymous requests; a present but invalid token is still rejected (401)."""
    if credentials is None:
        return None
    return authenticate_bearer(credentials.credentials, db, codec)


def get_current_user(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if user is None:
        raise AuthenticationRequiredError()
    return user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with ROLE_ADMIN. Raises 403 for non-admin."""
    policy.ensure_admin(current_user)
    return current_user


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(db, codec)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns an access token and a refresh token.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    return service.login(body.email, body.password)


@router.post("/refresh", response_model=TokenPairResponse)
def refresh(
    body: RefreshTokenRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPairResponse:
    """
    Exchange a refresh token for a new access + refresh pair. The old refresh
    token is revoked and can never be used again.
    """
    try:
        return service.refresh(body.refresh_token)
    except (InvalidTokenError, NotFoundError) as e:
        # One answer for unknown, revoked, expired and malformed tokens.
        logger.warning("Refresh rejected: %s", e.message)
        raise InvalidTokenError("Invalid or expired refresh token") from e


@router.post("/logout", response_model=MessageResponse)
def logout(
    body: LogoutRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke a refresh token. Returns 404 when the token was never issued."""
    return service.logout(body.refresh_token)


@router.post("/logout-all", response_model=MessageResponse)
def logout_all(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke every refresh token of the calling user (log out on all devices)."""
    return service.logout_all(current_user.id)
