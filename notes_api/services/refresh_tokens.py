"""Refresh token store: registry of issued refresh tokens for revocation and replay prevention."""

import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notes_api.core.exceptions import ConflictError, NotFoundError
from notes_api.models import RefreshToken
from notes_api.models.base import utcnow

logger = logging.getLogger(__name__)


class RefreshTokenStore:
    """
    CRUD over the refresh_tokens table.

    Methods only flush; the caller owns the transaction and commits once so a
    login or a rotation is atomic.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def save(self, record: RefreshToken) -> RefreshToken:
        """Insert or update. A duplicate token string raises ConflictError; the caller rolls back."""
        existing = self.find_by_token(record.token)
        if existing is not None and existing is not record:
            raise ConflictError("Refresh token already exists")
        self.db.add(record)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConflictError("Refresh token already exists", cause=e) from e
        return record

    def find_by_token(self, token: str) -> RefreshToken | None:
        return self.db.query(RefreshToken).filter(RefreshToken.token == token).first()

    def get_by_token(self, token: str) -> RefreshToken:
        record = self.find_by_token(token)
        if record is None:
            raise NotFoundError("Refresh token not found")
        return record

    def revoke(self, record: RefreshToken) -> RefreshToken:
        """Mark revoked. Revoking an already revoked token is a no-op."""
        if not record.revoked:
            record.revoked = True
            self.db.flush()
        return record

    def revoke_if_active(self, record: RefreshToken) -> bool:
        """
        Revoke only if nobody else has. Returns False when another transaction
        revoked the row first, so at most one rotation of a token succeeds.
        """
        result = self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.id == record.id, RefreshToken.revoked.is_(False))
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self.db.refresh(record)
        return True

    def list_by_account(self, user_id: int) -> list[RefreshToken]:
        return (
            self.db.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.id)
            .all()
        )

    def revoke_all_for_account(self, user_id: int) -> int:
        """Revoke every still-unrevoked token of an account ("log out everywhere")."""
        result = self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked.is_(False))
            .values(revoked=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def purge_expired(self, cutoff: datetime | None = None) -> int:
        """Delete tokens whose expires_at is before cutoff. Only used by the retention job."""
        cutoff = cutoff or utcnow()
        deleted = (
            self.db.query(RefreshToken)
            .filter(RefreshToken.expires_at < cutoff)
            .delete(synchronize_session=False)
        )
        logger.debug("Purged expired refresh tokens: cutoff=%s deleted=%s", cutoff.isoformat(), deleted)
        return deleted
