"""Use case and background service for reading the posts collection.

``FetchPosts`` performs one synchronous port call and folds every outcome
into a ``FetchResult``. ``FetchPostsService`` runs it on an executor and
hands back a future, so callers never see the result inside the call that
started the request.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from postboard.domain.models import PostBatch
from postboard.domain.ports import PostsPort, UseCaseError
from postboard.usecases.error_mapping import (
    FetchErrorKind,
    fetch_error_kind,
    map_api_error,
)


@dataclass(frozen=True)
class FetchError:
    """Typed failure of one fetch attempt."""

    kind: FetchErrorKind
    error: UseCaseError

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.code}: {self.message}"


@dataclass(frozen=True)
class FetchResult:
    """Either a decoded batch or a ``FetchError``, never both."""

    posts: Optional[PostBatch] = None
    error: Optional[FetchError] = None

    def __post_init__(self) -> None:
        if (self.posts is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of posts or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, posts: PostBatch) -> "FetchResult":
        return cls(posts=tuple(posts))

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)


@dataclass
class FetchPosts:
    """Fetch the posts batch through ``PostsPort`` and map failures."""

    posts_port: PostsPort

    def __call__(self) -> FetchResult:
        try:
            posts = self.posts_port.fetch_posts()
        except Exception as exc:
            mapped = map_api_error(
                exc,
                default_code="FETCH_FAILED",
                default_message="Fetching posts failed.",
            )
            return FetchResult.failure(FetchError(kind=fetch_error_kind(exc), error=mapped))
        return FetchResult.success(posts)


class FetchPostsService:
    """Run ``FetchPosts`` on a background executor.

    Every ``fetch_posts`` call submits exactly one job and returns its future.
    The future resolves once with a ``FetchResult``; adapter failures are
    folded into the result rather than set as the future's exception.
    """

    def __init__(
        self,
        posts_port: PostsPort,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._uc = FetchPosts(posts_port)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="postboard-fetch"
        )

    def fetch_posts(self) -> "Future[FetchResult]":
        self._log.debug("Submitting posts fetch")
        return self._executor.submit(self._uc)

    def close(self) -> None:
        """Shut down the executor if this service created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)


__all__ = ["FetchError", "FetchPosts", "FetchPostsService", "FetchResult"]
