"""Post record and the JSON codec for post batches.

Decoding is strict: every element of the array must carry ``userId``,
``id``, ``title`` and ``body`` with the right JSON types, otherwise the
whole payload is rejected. Extra keys are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

PostBatch = Tuple["Post", ...]


class PostDecodeError(ValueError):
    """Raised when a payload does not match the post array shape."""


@dataclass(frozen=True)
class Post:
    """One post as served by the posts endpoint."""

    user_id: int
    id: int
    title: str
    body: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Post":
        """Build a post from one decoded JSON object.

        Raises:
            PostDecodeError: If a field is missing or has the wrong type.
        """
        if not isinstance(payload, Mapping):
            raise PostDecodeError(
                f"expected object, got {type(payload).__name__}"
            )
        return cls(
            user_id=_require_int(payload, "userId"),
            id=_require_int(payload, "id"),
            title=_require_str(payload, "title"),
            body=_require_str(payload, "body"),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire representation using the endpoint's key names."""
        return {
            "userId": self.user_id,
            "id": self.id,
            "title": self.title,
            "body": self.body,
        }


def _require_int(payload: Mapping[str, Any], key: str) -> int:
    if key not in payload:
        raise PostDecodeError(f"missing field '{key}'")
    value = payload[key]
    # bool is an int subclass; JSON true/false is not an integer.
    if isinstance(value, bool) or not isinstance(value, int):
        raise PostDecodeError(
            f"field '{key}' must be an integer, got {type(value).__name__}"
        )
    return value


def _require_str(payload: Mapping[str, Any], key: str) -> str:
    if key not in payload:
        raise PostDecodeError(f"missing field '{key}'")
    value = payload[key]
    if not isinstance(value, str):
        raise PostDecodeError(
            f"field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def decode_posts(payload: Any) -> PostBatch:
    """Decode a JSON array of post objects, preserving order.

    Raises:
        PostDecodeError: If ``payload`` is not a list or any element fails.
    """
    if not isinstance(payload, list):
        raise PostDecodeError(
            f"expected array of posts, got {type(payload).__name__}"
        )
    posts: List[Post] = []
    for index, item in enumerate(payload):
        try:
            posts.append(Post.from_payload(item))
        except PostDecodeError as exc:
            raise PostDecodeError(f"posts[{index}]: {exc}") from exc
    return tuple(posts)


def decode_posts_json(text: str | bytes) -> PostBatch:
    """Parse JSON text and decode it as a post batch."""
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise PostDecodeError(f"invalid JSON: {exc}") from exc
    return decode_posts(payload)


def encode_posts(posts: Iterable[Post]) -> List[Dict[str, Any]]:
    """Return the wire payload for a batch (inverse of ``decode_posts``)."""
    return [post.to_payload() for post in posts]


__all__ = [
    "Post",
    "PostBatch",
    "PostDecodeError",
    "decode_posts",
    "decode_posts_json",
    "encode_posts",
]
