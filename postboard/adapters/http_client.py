"""Shared HTTP transport for the posts adapter.

A thin wrapper around ``requests.Session`` that owns the timeout policy and
turns ``requests`` failures into typed adapter errors.

Dependencies:
    - ``requests`` for network I/O.
    - ``postboard.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``postboard.adapters.posts_rest.PostsRestAdapter``.
    - Used only inside adapter layer methods; use cases interact through ports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
from requests import exceptions as req_exc

from postboard.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for one GET.
    """
    request_timeout_s: float = 10


class PlainSession:
    """Sends exactly one bare GET per call: no retries, no extra headers.

    Any status code is handed back to the caller; only transport failures
    raise here.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        self.session = requests.Session()
        self.cfg = cfg or HttpConfig()

    def get(self, url: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Send one GET request.

        Raises:
            ApiTimeoutError: On timeout or connectivity failure.
            ApiError: On any other ``requests`` failure.
        """
        context = f"GET {url}"
        try:
            return self.session.get(url, timeout=timeout or self.cfg.request_timeout_s)
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            raise ApiTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.RequestException as exc:
            raise ApiError(str(exc), context=context) from exc

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "PlainSession"]
