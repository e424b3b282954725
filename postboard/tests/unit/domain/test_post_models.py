from __future__ import annotations

import json

import pytest

from postboard.domain.models import (
    Post,
    PostDecodeError,
    decode_posts,
    decode_posts_json,
    encode_posts,
)


def _payload(idx: int, **overrides):
    item = {"userId": 1 + idx // 3, "id": idx, "title": f"title {idx}", "body": f"body {idx}"}
    item.update(overrides)
    return item


def test_decode_posts_preserves_count_fields_and_order() -> None:
    payload = [_payload(7), _payload(2), _payload(5)]

    posts = decode_posts(payload)

    assert [post.id for post in posts] == [7, 2, 5]
    assert posts[0] == Post(user_id=3, id=7, title="title 7", body="body 7")
    assert isinstance(posts, tuple)


def test_decode_posts_single_scenario() -> None:
    text = '[{"userId":1,"id":1,"title":"hello","body":"world"}]'

    assert decode_posts_json(text) == (Post(user_id=1, id=1, title="hello", body="world"),)


def test_decode_posts_empty_array() -> None:
    assert decode_posts([]) == ()


def test_decode_posts_allows_empty_strings_and_extra_keys() -> None:
    posts = decode_posts([_payload(1, title="", body="", extra={"x": 1})])

    assert posts[0].title == ""
    assert posts[0].body == ""


def test_decode_posts_rejects_whole_batch_when_one_field_missing() -> None:
    broken = _payload(2)
    del broken["body"]

    with pytest.raises(PostDecodeError) as excinfo:
        decode_posts([_payload(1), broken, _payload(3)])

    assert "posts[1]" in str(excinfo.value)
    assert "body" in str(excinfo.value)


@pytest.mark.parametrize(
    "field, value",
    [
        ("userId", "1"),
        ("id", 1.5),
        ("id", True),
        ("title", None),
        ("body", 42),
    ],
)
def test_decode_posts_rejects_wrong_types(field, value) -> None:
    with pytest.raises(PostDecodeError):
        decode_posts([_payload(1, **{field: value})])


def test_decode_posts_requires_array() -> None:
    with pytest.raises(PostDecodeError):
        decode_posts({"posts": [_payload(1)]})


def test_decode_posts_rejects_non_object_elements() -> None:
    with pytest.raises(PostDecodeError):
        decode_posts([_payload(1), "nope"])


def test_decode_posts_json_rejects_malformed_text() -> None:
    with pytest.raises(PostDecodeError):
        decode_posts_json("[{")


def test_encode_then_decode_yields_equal_batch() -> None:
    batch = (
        Post(user_id=1, id=1, title="a", body="b"),
        Post(user_id=2, id=9, title="", body="multi\nline ünïcode"),
    )

    text = json.dumps(encode_posts(batch))

    assert decode_posts_json(text) == batch


def test_post_is_immutable() -> None:
    post = Post(user_id=1, id=1, title="t", body="b")
    with pytest.raises(AttributeError):
        post.title = "changed"  # type: ignore[misc]
