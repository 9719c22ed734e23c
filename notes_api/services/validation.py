"""Input validation: explicit field checks returning (field, message) violations."""

import re

from notes_api.core.exceptions import InputValidationError, Violation

NAME_MIN_LEN = 3
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 5000
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 15
TITLE_MAX_LEN = 255
CONTENT_MAX_LEN = 5000

# One "@", no whitespace, a dot in the domain part.
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _required(field: str, value: str | None) -> Violation | None:
    if value is None:
        return Violation(field, f"Field '{field}' is required and must be provided in the request body")
    if not value.strip():
        return Violation(field, f"Field '{field}' cannot be empty or blank")
    return None


def _length(field: str, value: str, min_len: int, max_len: int, when_provided: bool) -> Violation | None:
    if min_len <= len(value) <= max_len:
        return None
    suffix = " when provided" if when_provided else ""
    return Violation(
        field, f"Field '{field}' must be between {min_len} and {max_len} characters{suffix}"
    )


def check_name(value: str, *, partial: bool = False) -> list[Violation]:
    violations = []
    if not value.strip():
        violations.append(Violation("name", "Field 'name' cannot be empty or blank"))
    length = _length("name", value, NAME_MIN_LEN, NAME_MAX_LEN, partial)
    if length:
        violations.append(length)
    return violations


def check_email(value: str, *, partial: bool = False) -> list[Violation]:
    violations = []
    length = _length("email", value, 1, EMAIL_MAX_LEN, partial)
    if length:
        violations.append(length)
    if not EMAIL_PATTERN.match(value):
        violations.append(Violation("email", "Invalid email format"))
    return violations


def check_password(value: str, *, partial: bool = False) -> list[Violation]:
    """Length 8-15, no whitespace, at least one letter, one digit and one special character."""
    violations = []
    length = _length("password", value, PASSWORD_MIN_LEN, PASSWORD_MAX_LEN, partial)
    if length:
        violations.append(length)
    if any(ch.isspace() for ch in value):
        violations.append(Violation("password", "Field 'password' must not contain whitespace"))
    has_letter = any(ch.isalpha() for ch in value)
    has_digit = any(ch.isdigit() for ch in value)
    has_special = any(not ch.isalnum() and not ch.isspace() for ch in value)
    if not (has_letter and has_digit and has_special):
        violations.append(
            Violation(
                "password",
                "Password must contain at least one letter, one number, and one special character",
            )
        )
    return violations


def validate_user_create(name: str | None, email: str | None, password: str | None) -> list[Violation]:
    violations: list[Violation] = []
    for field, value, check in (
        ("name", name, check_name),
        ("email", email, check_email),
        ("password", password, check_password),
    ):
        missing = _required(field, value)
        if missing:
            violations.append(missing)
        else:
            violations.extend(check(value))
    return violations


def validate_user_update(name: str | None, email: str | None, password: str | None) -> list[Violation]:
    violations: list[Violation] = []
    if name is not None:
        violations.extend(check_name(name, partial=True))
    if email is not None:
        violations.extend(check_email(email, partial=True))
    if password is not None:
        violations.extend(check_password(password, partial=True))
    return violations


def validate_note_create(title: str | None, content: str | None) -> list[Violation]:
    violations: list[Violation] = []
    for field, value, max_len in (("title", title, TITLE_MAX_LEN), ("content", content, CONTENT_MAX_LEN)):
        missing = _required(field, value)
        if missing:
            violations.append(missing)
            continue
        length = _length(field, value, 1, max_len, False)
        if length:
            violations.append(length)
    return violations


def validate_note_update(title: str | None, content: str | None) -> list[Violation]:
    violations: list[Violation] = []
    for field, value, max_len in (("title", title, TITLE_MAX_LEN), ("content", content, CONTENT_MAX_LEN)):
        if value is None:
            continue
        if not value.strip():
            violations.append(Violation(field, f"Field '{field}' cannot be empty or blank"))
            continue
        length = _length(field, value, 1, max_len, True)
        if length:
            violations.append(length)
    return violations


def raise_if_invalid(violations: list[Violation]) -> None:
    if violations:
        raise InputValidationError(violations)
