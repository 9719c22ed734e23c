"""ORM model for issued refresh tokens (rotation and revocation)."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, false, func
from sqlalchemy.orm import relationship

from notes_api.models.base import Base, as_utc, utcnow


class RefreshToken(Base):
    """
    One issued refresh token. Rows are append-only: the only mutation is
    flipping revoked to True on rotation or logout.

    expires_at is tracked separately from the token's own exp claim and set
    from the same lifetime at issuance.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(1024), nullable=False, unique=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    revoked = Column(Boolean, nullable=False, default=False, server_default=false())

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires_at) <= (now or utcnow())

    def is_active(self, now: datetime | None = None) -> bool:
        return not self.revoked and not self.is_expired(now)

    def __repr__(self) -> str:
        return f"RefreshToken(id={self.id!r}, user_id={self.user_id!r}, revoked={self.revoked!r})"
