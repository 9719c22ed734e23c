"""
Authentication flow: login, refresh-token rotation and logout.

Refresh token lifecycle:
  ACTIVE -> ROTATED (revoked by a successful refresh)
  ACTIVE -> REVOKED (logout)
  ACTIVE -> EXPIRED (derived from expires_at, never stored)

A refresh token is only usable when it decodes, is unexpired, has type
"refresh", and its store record exists, is not revoked and is not expired.
"""

import logging
from datetime import datetime
from functools import lru_cache

from sqlalchemy.orm import Session

from notes_api.core.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from notes_api.core.security import (
    TOKEN_TYPE_REFRESH,
    TokenCodec,
    hash_password,
    verify_password,
)
from notes_api.models import RefreshToken, User
from notes_api.models.base import utcnow
from notes_api.schemas.auth import (
    LoginResponse,
    MessageResponse,
    TokenPairResponse,
    UserInfo,
)
from notes_api.services.refresh_tokens import RefreshTokenStore

logger = logging.getLogger(__name__)


# Verified against when the email is unknown so both login failure paths cost one bcrypt check.
@lru_cache
def _dummy_password_hash() -> str:
    return hash_password("dummy-password-for-timing")


class AuthService:
    """Orchestrates TokenCodec, RefreshTokenStore and password verification."""

    def __init__(self, db: Session, codec: TokenCodec) -> None:
        self.db = db
        self.codec = codec
        self.store = RefreshTokenStore(db)

    def _issue_pair(self, user: User, now: datetime) -> tuple[str, RefreshToken]:
        access_token = self.codec.issue_access_token(user.id, user.email)
        refresh_token = self.codec.issue_refresh_token(user.id)
        record = RefreshToken(
            token=refresh_token,
            user_id=user.id,
            expires_at=now + self.codec.refresh_ttl,
            created_at=now,
            revoked=False,
        )
        self.store.save(record)
        return access_token, record

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Authenticate with email and password and issue an access + refresh pair.
        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            verify_password(password, _dummy_password_hash())
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        try:
            access_token, record = self._issue_pair(user, utcnow())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Login succeeded", extra={"user_id": user.id})
        return LoginResponse(
            access_token=access_token,
            refresh_token=record.token,
            expires_in=self.codec.access_expires_in,
            user=UserInfo(
                id=user.id,
                name=user.name,
                email=user.email,
                roles=sorted(user.roles),
            ),
        )

    def refresh(self, refresh_token: str) -> TokenPairResponse:
        """
        Rotate a refresh token: revoke it and issue a new pair in one transaction.

        Raises InvalidTokenError (undecodable, expired, wrong type, revoked) or
        NotFoundError (structurally valid but never issued by this store).
        """
        claims = self.codec.decode(refresh_token)
        if self.codec.is_expired(claims):
            raise InvalidTokenError("Refresh token has expired")
        if claims.token_type != TOKEN_TYPE_REFRESH:
            raise InvalidTokenError("Invalid refresh token")

        record = self.store.get_by_token(refresh_token)
        if record.revoked:
            raise InvalidTokenError("Refresh token has been revoked")
        now = utcnow()
        if record.is_expired(now):
            raise InvalidTokenError("Refresh token has expired")

        try:
            if not self.store.revoke_if_active(record):
                raise InvalidTokenError("Refresh token has been revoked")
            access_token, new_record = self._issue_pair(record.user, now)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Refresh token rotated",
            extra={"user_id": record.user_id, "refresh_token_id": new_record.id},
        )
        return TokenPairResponse(
            access_token=access_token,
            refresh_token=new_record.token,
            expires_in=self.codec.access_expires_in,
        )

    def logout(self, refresh_token: str) -> MessageResponse:
        """Revoke a refresh token. Logging out an already revoked token still succeeds."""
        record = self.store.find_by_token(refresh_token)
        if record is None:
            raise NotFoundError("Refresh token not found")
        try:
            self.store.revoke(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Logout", extra={"user_id": record.user_id})
        return MessageResponse(message="Logout successful")

    def logout_all(self, user_id: int) -> MessageResponse:
        """Revoke every active refresh token of an account."""
        try:
            revoked = self.store.revoke_all_for_account(user_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Logout everywhere", extra={"user_id": user_id, "revoked": revoked})
        return MessageResponse(message=f"Logged out from {revoked} session(s)")
