from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from postboard.domain.models import Post, PostBatch
from postboard.domain.ports import PostsPort


def _sample_posts() -> PostBatch:
    return tuple(
        Post(
            user_id=1 + (idx - 1) // 5,
            id=idx,
            title=f"Offline post {idx}",
            body=f"Body of offline post {idx}.\nServed without network access.",
        )
        for idx in range(1, 11)
    )


@dataclass
class PostsMock(PostsPort):
    """Offline substitute for ``PostsRestAdapter`` with deterministic responses.

    ``error`` (when set) is raised from every ``fetch_posts`` call instead of
    returning ``posts``.
    """

    posts: PostBatch = field(default_factory=_sample_posts)
    error: Optional[Exception] = None
    calls: int = 0

    def fetch_posts(self) -> PostBatch:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return tuple(self.posts)

    def close(self) -> None:
        return None


__all__ = ["PostsMock"]
