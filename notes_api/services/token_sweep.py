"""Refresh token retention: delete tokens that expired more than TOKEN_RETENTION_HOURS ago."""

import logging
from datetime import datetime, timezone, timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from notes_api.services.refresh_tokens import RefreshTokenStore

if TYPE_CHECKING:
    from notes_api.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_sweep(session: Session, settings: "Settings") -> int:
    """
    Delete refresh tokens whose expires_at is older than the retention window.

    Expired tokens are already unusable; this only trims the audit trail.
    Returns the number of rows deleted. Idempotent: safe to run repeatedly.
    """
    if not settings.TOKEN_RETENTION_ENABLED:
        logger.info("Token retention is disabled (TOKEN_RETENTION_ENABLED=false); skipping.")
        return 0

    cutoff = datetime.now(timezone.utc) - timedelta(hours=settings.TOKEN_RETENTION_HOURS)
    deleted_count = RefreshTokenStore(session).purge_expired(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Token sweep run: cutoff=%s, refresh_tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
