from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


class ApiDecodeError(ApiError):
    """Response body is not JSON or does not match the post array shape.

    ``status`` keeps the HTTP status of the response whose body was rejected,
    so a 404 page and a malformed 200 stay distinguishable in logs.
    """


class ApiEmptyResponseError(ApiError):
    """Response arrived without a body."""


def body_snippet(resp: Any, limit: int = 200) -> str:
    """Return the start of a response body for error messages."""
    text = getattr(resp, "text", "") or ""
    return text.strip()[:limit]
