"""Structured error body returned for every failed request."""

from datetime import datetime

from pydantic import Field

from notes_api.schemas.base import CamelModel


class ErrorResponse(CamelModel):
    timestamp: datetime
    status: int
    error: str = Field(..., description="HTTP reason phrase")
    message: str
    path: str | None = None
    trace_id: str | None = None
    validation_errors: dict[str, list[str]] | None = None
