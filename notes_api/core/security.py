"""Password hashing and JWT creation/verification for authentication."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

import bcrypt
import jwt

from notes_api.core.config import settings
from notes_api.core.exceptions import InvalidTokenError

if TYPE_CHECKING:
    from notes_api.core.config import Settings

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"

TokenType = Literal["access", "refresh"]

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (bcrypt compares in constant time)."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Decoded content of a bearer token. Never persisted."""

    subject: str
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime
    email: str | None = None
    jti: str | None = None

    @property
    def account_id(self) -> int:
        """Subject as an account id; raises InvalidTokenError if it is not an integer."""
        try:
            return int(self.subject)
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token payload", cause=e) from e


def _to_numeric_date(value: datetime) -> float:
    # Keep sub-second precision; JWT NumericDate allows fractional seconds.
    return round(value.timestamp(), 6)


def _from_numeric_date(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidTokenError("Invalid token payload")
    return datetime.fromtimestamp(value, tz=UTC)


class TokenCodec:
    """
    Issues and decodes HMAC-signed JWTs.

    Stateless apart from the signing key and lifetimes, so a single instance is
    shared by all requests. decode() checks signature and structure only;
    expiry is a separate predicate (is_expired) so callers decide how to react.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, app_settings: "Settings") -> "TokenCodec":
        return cls(
            secret=app_settings.JWT_SECRET.get_secret_value(),
            algorithm=app_settings.JWT_ALGORITHM,
            access_ttl=timedelta(milliseconds=app_settings.JWT_ACCESS_TOKEN_EXPIRATION_MS),
            refresh_ttl=timedelta(milliseconds=app_settings.JWT_REFRESH_TOKEN_EXPIRATION_MS),
        )

    @property
    def access_expires_in(self) -> int:
        """Access token lifetime in whole seconds, as reported to clients."""
        return int(self.access_ttl.total_seconds())

    def _now(self) -> datetime:
        return datetime.now(UTC)

    def _encode(self, payload: dict[str, Any]) -> str:
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_access_token(self, account_id: int, email: str) -> str:
        """Create a JWT access token with sub (account id), email, type, iat and exp."""
        now = self._now()
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "email": email,
            "type": TOKEN_TYPE_ACCESS,
            "iat": _to_numeric_date(now),
            "exp": _to_numeric_date(now + self.access_ttl),
        }
        return self._encode(payload)

    def issue_refresh_token(self, account_id: int) -> str:
        """Create a JWT refresh token; jti makes every token string unique."""
        now = self._now()
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "type": TOKEN_TYPE_REFRESH,
            "jti": str(uuid.uuid4()),
            "iat": _to_numeric_date(now),
            "exp": _to_numeric_date(now + self.refresh_ttl),
        }
        return self._encode(payload)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify the signature and return the claims.
        Raises InvalidTokenError on a bad signature or malformed token; does not check expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "type", "iat", "exp"],
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(cause=e) from e

        token_type = payload.get("type")
        if token_type not in (TOKEN_TYPE_ACCESS, TOKEN_TYPE_REFRESH):
            raise InvalidTokenError("Invalid token payload")
        if token_type == TOKEN_TYPE_REFRESH and not payload.get("jti"):
            raise InvalidTokenError("Invalid token payload")
        return TokenClaims(
            subject=str(payload["sub"]),
            token_type=token_type,
            issued_at=_from_numeric_date(payload["iat"]),
            expires_at=_from_numeric_date(payload["exp"]),
            email=payload.get("email"),
            jti=payload.get("jti"),
        )

    def is_expired(self, claims: TokenClaims) -> bool:
        """Expiry is exclusive: a token whose exp equals now is already expired."""
        return claims.expires_at <= self._now()

    def validate(self, token: str) -> bool:
        """True when the token decodes and is unexpired. Never raises."""
        try:
            return not self.is_expired(self.decode(token))
        except InvalidTokenError:
            return False


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide codec built from settings (FastAPI dependency)."""
    return TokenCodec.from_settings(settings)
