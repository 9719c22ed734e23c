"""HTTP middleware."""

from notes_api.middleware.request_trace import RequestTraceMiddleware

__all__ = ["RequestTraceMiddleware"]
