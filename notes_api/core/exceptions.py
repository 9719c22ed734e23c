"""Domain exceptions. Each carries the HTTP status it maps to at the API boundary."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """One failed input check: the offending field and a human readable message."""

    field: str
    message: str


class NotesApiError(Exception):
    """Base class for errors the API translates into a structured error body."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class InvalidCredentialsError(NotesApiError):
    """Bad email or password at login. Same message for both causes."""

    status_code = 401
    default_message = "Invalid email or password"


class InvalidTokenError(NotesApiError):
    """Malformed, expired, revoked or wrong-type token."""

    status_code = 401
    default_message = "Invalid or expired authentication token"


class AuthenticationRequiredError(NotesApiError):
    status_code = 401
    default_message = "Authentication is required to access this resource"


class AccessDeniedError(NotesApiError):
    status_code = 403
    default_message = "You don't have permission to access this resource"


class NotFoundError(NotesApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(NotesApiError):
    """A unique field (email, refresh token string) already exists."""

    status_code = 409
    default_message = "Resource already exists"


class InvalidRoleError(NotesApiError):
    """Unknown role name or a change that would break the role-set invariant."""

    status_code = 400
    default_message = "Invalid role"


class InputValidationError(NotesApiError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, violations: list[Violation], message: str | None = None) -> None:
        self.violations = violations
        super().__init__(message or self._summarize(violations))

    @staticmethod
    def _summarize(violations: list[Violation]) -> str:
        if len(violations) == 1:
            return violations[0].message
        return f"Validation failed for {len(violations)} fields"

    def errors_by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for v in self.violations:
            grouped.setdefault(v.field, []).append(v.message)
        return grouped
