from __future__ import annotations

import logging
from typing import Any

import requests

from postboard.domain.models import PostBatch, PostDecodeError, decode_posts
from postboard.domain.ports import PostsPort

from .api_errors import ApiDecodeError, ApiEmptyResponseError, body_snippet
from .http_client import HttpConfig, PlainSession

DEFAULT_POSTS_URL = "https://jsonplaceholder.typicode.com/posts"


class PostsRestAdapter(PostsPort):
    """REST adapter that reads the posts collection from one fixed URL.

    The status code does not decide the outcome: every body goes through the
    decoder, so an error page fails as a decode error and a post array is
    accepted whatever status it came with.
    """

    def __init__(
        self,
        posts_url: str = DEFAULT_POSTS_URL,
        *,
        request_timeout_s: float = 10,
    ) -> None:
        url = str(posts_url or "").strip()
        if not url:
            raise ValueError("PostsRestAdapter requires a posts URL")
        self.posts_url = url
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s)
        self.session = PlainSession(self.cfg)
        self._log = logging.getLogger(__name__)

    def fetch_posts(self) -> PostBatch:
        resp = self.session.get(self.posts_url)
        status = resp.status_code
        ctx = f"posts[HTTP {status}]"
        if not 200 <= status < 300:
            self._log.warning("%s from %s; decoding body anyway", ctx, self.posts_url)
        payload = self._json_any(resp, ctx)
        try:
            posts = decode_posts(payload)
        except PostDecodeError as exc:
            raise ApiDecodeError(
                f"{ctx}: {exc}", status=status, payload=body_snippet(resp), context=ctx
            ) from exc
        self._log.debug("Decoded %d posts from %s", len(posts), self.posts_url)
        return posts

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _json_any(resp: requests.Response, ctx: str) -> Any:
        content = getattr(resp, "content", None)
        if not content or not content.strip():
            raise ApiEmptyResponseError(
                f"{ctx}: empty response body", status=resp.status_code, context=ctx
            )
        try:
            return resp.json()
        except ValueError as exc:
            snippet = body_snippet(resp)
            raise ApiDecodeError(
                f"{ctx}: invalid JSON response: {snippet}",
                status=resp.status_code,
                payload=snippet,
                context=ctx,
            ) from exc


__all__ = ["DEFAULT_POSTS_URL", "PostsRestAdapter"]
