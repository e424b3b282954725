from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, List

import pytest

from postboard.adapters.api_errors import ApiTimeoutError
from postboard.adapters.posts_mock import PostsMock
from postboard.domain.models import Post, decode_posts_json
from postboard.domain.ports import UseCaseError
from postboard.usecases.error_mapping import FetchErrorKind
from postboard.usecases.fetch_posts import FetchError, FetchPosts, FetchPostsService, FetchResult
from postboard.viewmodels.posts_vm import PostsVM

HELLO = (Post(user_id=1, id=1, title="hello", body="world"),)


class FakeService:
    """Hands out pending futures so tests decide when a fetch completes."""

    def __init__(self) -> None:
        self.futures: List[Future] = []

    def fetch_posts(self) -> Future:
        future: Future = Future()
        self.futures.append(future)
        return future


class QueueDispatch:
    """Collects UI tasks; ``run`` plays the role of the UI loop."""

    def __init__(self) -> None:
        self.tasks: List[Callable[[], None]] = []

    def __call__(self, task: Callable[[], None]) -> None:
        self.tasks.append(task)

    def run(self) -> None:
        tasks, self.tasks = self.tasks, []
        for task in tasks:
            task()


def _transport_failure() -> FetchResult:
    return FetchResult.failure(
        FetchError(
            kind=FetchErrorKind.TRANSPORT,
            error=UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection."),
        )
    )


def _make_vm():
    service = FakeService()
    dispatch = QueueDispatch()
    notifications: List[tuple] = []
    vm = PostsVM(service, dispatch=dispatch)
    vm.on_data_changed = lambda: notifications.append(vm.posts)
    return vm, service, dispatch, notifications


def test_initial_state_is_empty() -> None:
    vm, _, _, _ = _make_vm()

    assert vm.posts == ()
    assert vm.is_loading is False
    assert vm.last_error is None


def test_success_replaces_posts_then_notifies_once() -> None:
    vm, service, dispatch, notifications = _make_vm()

    assert vm.fetch_posts() is True
    service.futures[0].set_result(FetchResult.success(HELLO))

    # Nothing is applied until the UI loop runs the dispatched task.
    assert vm.posts == ()
    assert notifications == []

    dispatch.run()

    assert vm.posts == HELLO
    assert notifications == [HELLO]
    assert vm.is_loading is False


def test_empty_batch_still_notifies() -> None:
    vm, service, dispatch, notifications = _make_vm()
    vm.fetch_posts()
    service.futures[0].set_result(FetchResult.success(HELLO))
    dispatch.run()

    vm.fetch_posts()
    service.futures[1].set_result(FetchResult.success(()))
    dispatch.run()

    assert vm.posts == ()
    assert notifications == [HELLO, ()]


def test_failure_keeps_previous_batch_and_does_not_notify(caplog) -> None:
    vm, service, dispatch, notifications = _make_vm()
    vm.fetch_posts()
    service.futures[0].set_result(FetchResult.success(HELLO))
    dispatch.run()
    errors: List[FetchError] = []
    vm.on_error = errors.append

    vm.fetch_posts()
    service.futures[1].set_result(_transport_failure())
    with caplog.at_level(logging.WARNING, logger="postboard.viewmodels.posts_vm"):
        dispatch.run()

    assert vm.posts == HELLO
    assert notifications == [HELLO]
    assert len(errors) == 1
    assert vm.last_error is errors[0]
    assert "REQUEST_TIMEOUT" in caplog.text


def test_first_fetch_failure_leaves_posts_empty() -> None:
    vm, service, dispatch, notifications = _make_vm()

    vm.fetch_posts()
    service.futures[0].set_result(_transport_failure())
    dispatch.run()

    assert vm.posts == ()
    assert notifications == []
    assert vm.last_error.kind is FetchErrorKind.TRANSPORT


def test_overlapping_fetch_is_ignored_while_outstanding() -> None:
    vm, service, dispatch, _ = _make_vm()

    assert vm.fetch_posts() is True
    assert vm.fetch_posts() is False
    assert len(service.futures) == 1

    service.futures[0].set_result(FetchResult.success(HELLO))
    dispatch.run()

    assert vm.fetch_posts() is True
    assert len(service.futures) == 2


def test_unexpected_future_exception_is_reported_as_failure() -> None:
    vm, service, dispatch, notifications = _make_vm()

    vm.fetch_posts()
    service.futures[0].set_exception(RuntimeError("worker died"))
    dispatch.run()

    assert vm.posts == ()
    assert notifications == []
    assert vm.last_error.code == "FETCH_FAILED"
    assert vm.is_loading is False


def test_surface_helpers_follow_batch_order() -> None:
    batch = decode_posts_json(
        '[{"userId":1,"id":3,"title":"c","body":"cc"},{"userId":1,"id":1,"title":"a","body":"aa"}]'
    )
    vm, service, dispatch, _ = _make_vm()
    vm.fetch_posts()
    service.futures[0].set_result(FetchResult.success(batch))
    dispatch.run()

    assert vm.rows() == [(3, "c"), (1, "a")]
    assert vm.post_at(1).body == "aa"
    assert vm.post_at(2) is None
    assert vm.post_at(-1) is None


def test_end_to_end_with_real_service_and_unreachable_port() -> None:
    service = FetchPostsService(PostsMock(error=ApiTimeoutError("Timeout contacting posts")))
    dispatch = QueueDispatch()
    notified: List[int] = []
    vm = PostsVM(service, dispatch=dispatch, on_data_changed=lambda: notified.append(1))
    try:
        vm.fetch_posts()
        # The use case itself is synchronous; wait on a second submit to flush the worker.
        service.fetch_posts().result(timeout=5)
    finally:
        service.close()
    dispatch.run()

    assert vm.posts == ()
    assert notified == []
    assert vm.last_error.code == "REQUEST_TIMEOUT"


def test_fetch_posts_use_case_feeds_vm_scenario() -> None:
    port = PostsMock(posts=HELLO)
    vm, service, dispatch, notifications = _make_vm()

    vm.fetch_posts()
    service.futures[0].set_result(FetchPosts(port)())
    dispatch.run()

    assert vm.posts == (Post(user_id=1, id=1, title="hello", body="world"),)
    assert len(notifications) == 1


def test_already_finished_fetch_still_waits_for_the_ui_loop() -> None:
    class ResolvedService:
        def fetch_posts(self) -> Future:
            future: Future = Future()
            future.set_result(FetchResult.success(HELLO))
            return future

    dispatch = QueueDispatch()
    notified: List[int] = []
    vm = PostsVM(ResolvedService(), dispatch=dispatch, on_data_changed=lambda: notified.append(1))

    assert vm.fetch_posts() is True

    # The done-callback ran inside fetch_posts, but only queued the update.
    assert notified == []
    assert vm.posts == ()
    assert vm.is_loading is True

    dispatch.run()

    assert notified == [1]
    assert vm.posts == HELLO
    assert vm.is_loading is False


def test_dispatch_is_required() -> None:
    with pytest.raises(TypeError):
        PostsVM(FakeService())  # type: ignore[call-arg]
