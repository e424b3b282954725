from __future__ import annotations

import threading
from typing import Callable, Dict, List

from postboard.app.ui_dispatcher import BlockingDispatcher, TkDispatcher


class FakeTk:
    """Stands in for ``after``/``after_cancel`` on a Tk root."""

    def __init__(self) -> None:
        self.pending: Dict[str, Callable[[], None]] = {}
        self.delays: List[int] = []
        self.cancelled: List[str] = []
        self._next = 0

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self._next += 1
        token = f"after#{self._next}"
        self.delays.append(delay_ms)
        self.pending[token] = callback
        return token

    def after_cancel(self, token: str) -> None:
        self.cancelled.append(token)
        self.pending.pop(token, None)

    def fire_all(self) -> None:
        for token, callback in list(self.pending.items()):
            self.pending.pop(token)
            callback()


def test_tasks_run_only_when_tick_fires() -> None:
    tk = FakeTk()
    dispatcher = TkDispatcher(tk.after, tk.after_cancel, interval_ms=25)
    ran: List[str] = []

    dispatcher.start()
    dispatcher(lambda: ran.append("a"))
    assert ran == []

    tk.fire_all()

    assert ran == ["a"]
    assert tk.delays == [25, 25]
    assert list(tk.pending) == ["after#2"]


def test_tasks_from_worker_threads_run_in_order_on_drain() -> None:
    tk = FakeTk()
    dispatcher = TkDispatcher(tk.after, tk.after_cancel)
    ran: List[int] = []

    worker = threading.Thread(target=lambda: [dispatcher(lambda i=i: ran.append(i)) for i in range(3)])
    worker.start()
    worker.join()

    assert dispatcher.drain() == 3
    assert ran == [0, 1, 2]


def test_failing_task_does_not_stop_the_drain() -> None:
    tk = FakeTk()
    dispatcher = TkDispatcher(tk.after, tk.after_cancel)
    ran: List[str] = []

    def boom() -> None:
        raise RuntimeError("bad task")

    dispatcher(boom)
    dispatcher(lambda: ran.append("after"))

    assert dispatcher.drain() == 2
    assert ran == ["after"]


def test_stop_cancels_pending_tick() -> None:
    tk = FakeTk()
    dispatcher = TkDispatcher(tk.after, tk.after_cancel)

    dispatcher.start()
    dispatcher.stop()
    dispatcher.stop()

    assert tk.cancelled == ["after#1"]
    assert tk.pending == {}


def test_blocking_dispatcher_runs_tasks_until_done() -> None:
    dispatcher = BlockingDispatcher()
    state = {"done": False}

    def finish() -> None:
        state["done"] = True

    threading.Timer(0.05, lambda: dispatcher(finish)).start()

    assert dispatcher.run_until(lambda: state["done"], timeout_s=5) is True


def test_blocking_dispatcher_times_out() -> None:
    dispatcher = BlockingDispatcher()

    assert dispatcher.run_until(lambda: False, timeout_s=0.05) is False
