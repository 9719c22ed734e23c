"""Shared helpers for tests: database reset, seeding and a short-lived token codec."""

from datetime import timedelta

from fastapi.testclient import TestClient

from notes_api.core.config import settings
from notes_api.core.database import SessionLocal, engine
from notes_api.core.security import TokenCodec, hash_password
from notes_api.models import Base, Note, Role, User
from notes_api.schemas.auth import CurrentUser

DEFAULT_PASSWORD = "Secret#1"
API = settings.API_V1_PREFIX


def reset_database() -> None:
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)


def create_user(
    email: str,
    password: str = DEFAULT_PASSWORD,
    name: str = "Test User",
    roles: tuple[Role, ...] = (Role.BASE,),
) -> int:
    """Insert a user and return its id."""
    db = SessionLocal()
    try:
        user = User(name=name, email=email, password_hash=hash_password(password))
        user.set_roles(roles)
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def create_note(owner_id: int | None, title: str = "Shopping", content: str = "Milk, eggs") -> int:
    db = SessionLocal()
    try:
        note = Note(title=title, content=content, owner_id=owner_id)
        db.add(note)
        db.commit()
        return note.id
    finally:
        db.close()


def current_user(user_id: int, *roles: Role, email: str | None = None) -> CurrentUser:
    return CurrentUser(
        id=user_id,
        email=email or f"user{user_id}@example.com",
        roles=frozenset(r.value for r in (roles or (Role.BASE,))),
    )


def make_codec(
    access_ttl: timedelta = timedelta(hours=1),
    refresh_ttl: timedelta = timedelta(days=7),
) -> TokenCodec:
    return TokenCodec(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        access_ttl=access_ttl,
        refresh_ttl=refresh_ttl,
    )


def login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
