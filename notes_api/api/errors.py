"""Translate exceptions into the structured error body at the HTTP boundary."""

import logging
import uuid
from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_api.core.exceptions import InputValidationError, NotesApiError
from notes_api.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred. Please contact support if the problem persists"


def _trace_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def error_response(
    request: Request,
    status_code: int,
    message: str,
    validation_errors: dict[str, list[str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(UTC),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
        trace_id=_trace_id(request),
        validation_errors=validation_errors,
    )
    if status_code == 401:
        headers = {**(headers or {}), "WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so no raw exception detail crosses the boundary."""

    @app.exception_handler(NotesApiError)
    async def handle_domain_error(request: Request, exc: NotesApiError) -> JSONResponse:
        logger.warning(
            "%s: %s",
            type(exc).__name__,
            exc.message,
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        validation_errors = (
            exc.errors_by_field() if isinstance(exc, InputValidationError) else None
        )
        return error_response(request, exc.status_code, exc.message, validation_errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            errors.setdefault(".".join(loc) or "body", []).append(err.get("msg", "Invalid value"))
        logger.warning("Request validation failed", extra={"path": request.url.path, "fields": list(errors)})
        message = "Malformed request" if list(errors) == ["body"] else "Validation failed"
        return error_response(request, 400, message, errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
        return error_response(request, exc.status_code, message, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unexpected error",
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(request, 500, GENERIC_SERVER_ERROR)
