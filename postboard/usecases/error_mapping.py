"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

import enum
from typing import Optional

from postboard.adapters.api_errors import (
    ApiDecodeError,
    ApiEmptyResponseError,
    ApiError,
    ApiTimeoutError,
)
from postboard.domain.models import PostDecodeError
from postboard.domain.ports import UseCaseError


class FetchErrorKind(str, enum.Enum):
    """Failure categories reported for one fetch attempt."""

    TRANSPORT = "transport"
    DECODE = "decode"
    EMPTY_RESPONSE = "empty_response"


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by an adapter or the codec.
        default_code: Code used when ``exc`` is not a known adapter error.
        default_message: Message used for unknown errors; falls back to ``str(exc)``.

    Returns:
        UseCaseError carrying a stable ``code`` and a user-facing ``message``.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, (ApiDecodeError, PostDecodeError)):
        return UseCaseError(
            "DECODE_FAILED",
            _compose_error_message(_status_label("Unexpected response format", exc), _detail(exc)),
        )
    if isinstance(exc, ApiEmptyResponseError):
        return UseCaseError(
            "EMPTY_RESPONSE", _status_label("Server returned an empty response", exc) + "."
        )
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def fetch_error_kind(exc: Exception) -> FetchErrorKind:
    """Classify an adapter exception into one of the fetch failure kinds."""
    if isinstance(exc, (ApiDecodeError, PostDecodeError)):
        return FetchErrorKind.DECODE
    if isinstance(exc, ApiEmptyResponseError):
        return FetchErrorKind.EMPTY_RESPONSE
    return FetchErrorKind.TRANSPORT


def _status_label(base: str, exc: Exception) -> str:
    # Only non-2xx statuses are worth showing to the user.
    status = getattr(exc, "status", None)
    if status is not None and not 200 <= status < 300:
        return f"{base} (HTTP {status})"
    return base


def _detail(exc: Exception) -> Optional[str]:
    cause = exc.__cause__
    if isinstance(cause, PostDecodeError):
        return str(cause)
    return str(exc) or None


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["FetchErrorKind", "fetch_error_kind", "map_api_error"]
