"""Posts list state for the posts window and the console surface.

Call context:
    ``postboard.app.main.App`` builds one ``PostsVM`` per run, registers the
    surface's redraw callback as ``on_data_changed`` and calls
    ``fetch_posts`` once on start (and again on Refresh).
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, List, Optional, Protocol, Tuple

from postboard.domain.models import Post, PostBatch
from postboard.domain.ports import UseCaseError
from postboard.usecases.error_mapping import FetchErrorKind
from postboard.usecases.fetch_posts import FetchError, FetchResult

Dispatch = Callable[[Callable[[], None]], None]


class PostsService(Protocol):
    def fetch_posts(self) -> "Future[FetchResult]": ...


class PostsVM:
    """
    Owns the current post batch and tells the surface when it changed.

    The VM never touches widgets. Completions from the background fetch are
    always handed to ``dispatch``, which must run them on the UI context;
    ``posts`` is only reassigned there.
    """

    def __init__(
        self,
        service: PostsService,
        *,
        dispatch: Dispatch,
        on_data_changed: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[FetchError], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._service = service
        self._dispatch = dispatch
        self.on_data_changed = on_data_changed
        self.on_error = on_error

        self.posts: PostBatch = ()
        self.is_loading: bool = False
        self.last_error: Optional[FetchError] = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def fetch_posts(self) -> bool:
        """Start one background fetch.

        Returns:
            ``True`` if a fetch was started, ``False`` if one is still
            outstanding (overlapping calls are ignored).
        """
        if self.is_loading:
            self._log.debug("Fetch already in progress; ignoring request")
            return False
        self.is_loading = True
        future = self._service.fetch_posts()
        future.add_done_callback(self._on_fetch_done)
        return True

    # ------------------------------------------------------------------
    # Surface helpers
    # ------------------------------------------------------------------
    def rows(self) -> List[Tuple[int, str]]:
        """Return ``(id, title)`` pairs in batch order."""
        return [(post.id, post.title) for post in self.posts]

    def post_at(self, index: int) -> Optional[Post]:
        posts = self.posts
        if 0 <= index < len(posts):
            return posts[index]
        return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_fetch_done(self, future: "Future[FetchResult]") -> None:
        # Runs on the executor thread.
        try:
            result = future.result()
        except Exception as exc:
            result = FetchResult.failure(
                FetchError(
                    kind=FetchErrorKind.TRANSPORT,
                    error=UseCaseError("FETCH_FAILED", str(exc) or "Fetching posts failed."),
                )
            )
        self._dispatch(lambda: self._apply_result(result))

    def _apply_result(self, result: FetchResult) -> None:
        self.is_loading = False
        if result.error is not None:
            self.last_error = result.error
            self._log.warning("Fetching posts failed: %s", result.error)
            if self.on_error:
                self.on_error(result.error)
            return

        self.posts = result.posts or ()
        self.last_error = None
        self._log.info("Loaded %d posts", len(self.posts))
        if self.on_data_changed:
            self.on_data_changed()


__all__ = ["Dispatch", "PostsVM"]
