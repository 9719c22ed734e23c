"""SQLAlchemy declarative Base and shared model helpers."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (sqlite drops the timezone on round-trip)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
