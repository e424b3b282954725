# postboard/app/main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from ..adapters.storage_local import StorageLocal
from ..usecases.fetch_posts import FetchError
from ..utils import logging as logging_utils
from ..viewmodels.posts_vm import PostsVM
from ..viewmodels.settings_vm import SettingsVM
from .controller import AppController
from .ui_dispatcher import BlockingDispatcher, TkDispatcher


def load_settings(storage: StorageLocal) -> SettingsVM:
    """Build a SettingsVM from stored prefs; bad prefs fall back to defaults.

    ``cmd_save`` on the returned VM writes back to the same storage.
    """
    log = logging.getLogger(__name__)
    settings = SettingsVM(on_save=storage.save_user_prefs)
    try:
        settings.apply_dict(storage.load_user_prefs())
    except (OSError, ValueError) as exc:
        log.warning("Ignoring stored settings from %s: %s", storage.prefs_path, exc)
    return settings


class App:
    """Bootstrap: wire PostsWindowView <-> PostsVM and the posts adapter."""

    def __init__(self, settings_vm: SettingsVM, *, offline: bool = False) -> None:
        # Imported here so console runs work without a display or Tk.
        from .views.posts_window import PostsWindowView

        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self.controller = AppController(settings_vm, offline=offline)

        self.win = PostsWindowView(
            on_refresh=self._on_refresh,
            on_select=self._on_select,
        )
        self.win.protocol("WM_DELETE_WINDOW", self._on_close)

        self.dispatcher = TkDispatcher(
            self.win.after,
            self.win.after_cancel,
            interval_ms=settings_vm.dispatch_interval_ms,
        )

        if not self.controller.ensure_ready():
            self.win.set_status("Invalid posts URL in settings.")
            self.vm: Optional[PostsVM] = None
            return
        self.vm = PostsVM(
            self.controller.fetch_service,
            dispatch=self.dispatcher,
            on_data_changed=self._on_data_changed,
            on_error=self._on_error,
        )

    # ------------------------------------------------------------------
    # View callbacks
    # ------------------------------------------------------------------
    def _on_refresh(self) -> None:
        if self.vm is None:
            return
        if self.vm.fetch_posts():
            self.win.set_busy(True)
            self.win.set_status("Loading posts…")

    def _on_select(self, index: int) -> None:
        post = self.vm.post_at(index) if self.vm else None
        if post is None:
            return
        self.win.show_detail(post.title, post.body)

    # ------------------------------------------------------------------
    # VM callbacks (UI thread)
    # ------------------------------------------------------------------
    def _on_data_changed(self) -> None:
        rows = self.vm.rows()
        self.win.set_rows(rows)
        self.win.set_busy(False)
        self.win.set_status(f"{len(rows)} posts")

    def _on_error(self, error: FetchError) -> None:
        self.win.set_busy(False)
        self.win.set_status(f"Could not load posts: {error.message}")

    def _on_close(self) -> None:
        self.dispatcher.stop()
        self.controller.close()
        self.win.destroy()

    def run(self) -> None:
        self.dispatcher.start()
        self._on_refresh()
        self.win.mainloop()


def run_console(
    settings_vm: SettingsVM,
    *,
    offline: bool = False,
    out=None,
) -> int:
    """Fetch once and print titles; returns a process exit code."""
    out = out or sys.stdout
    log = logging.getLogger(__name__)
    controller = AppController(settings_vm, offline=offline)
    if not controller.ensure_ready():
        return 2

    dispatcher = BlockingDispatcher()
    vm = PostsVM(controller.fetch_service, dispatch=dispatcher)

    def _print_rows() -> None:
        for post_id, title in vm.rows():
            print(f"{post_id:>4}  {title}", file=out)

    vm.on_data_changed = _print_rows
    try:
        vm.fetch_posts()
        # Request timeout plus slack for decode and dispatch.
        finished = dispatcher.run_until(
            lambda: not vm.is_loading, timeout_s=settings_vm.request_timeout_s + 5
        )
    finally:
        controller.close()
    if not finished:
        log.error("Timed out waiting for posts")
        return 1
    return 0 if vm.last_error is None else 1


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show posts from a JSON REST endpoint.")
    parser.add_argument("--url", help="Posts endpoint URL (overrides stored settings).")
    parser.add_argument("--timeout", type=int, help="Request timeout in seconds.")
    parser.add_argument("--prefs-dir", default=".", help="Directory holding user_prefs.json.")
    parser.add_argument("--console", action="store_true", help="Print titles instead of opening a window.")
    parser.add_argument("--offline", action="store_true", help="Serve built-in sample posts.")
    parser.add_argument("--log-level", help="Root log level (e.g. DEBUG, INFO).")
    parser.add_argument(
        "--save-prefs",
        action="store_true",
        help="Write the effective settings to user_prefs.json before starting.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging_utils.configure_root(args.log_level or logging.INFO)

    storage = StorageLocal(args.prefs_dir)
    settings = load_settings(storage)
    if not args.log_level:
        logging_utils.apply_preferences(settings.debug_logging)
    try:
        if args.url:
            settings.posts_url = args.url
        if args.timeout is not None:
            settings.request_timeout_s = args.timeout
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.save_prefs:
        try:
            settings.cmd_save()
        except OSError as exc:
            print(f"error: cannot write {storage.prefs_path}: {exc}", file=sys.stderr)
            return 2
        logging.getLogger(__name__).info("Saved settings to %s", storage.prefs_path)

    if args.console:
        return run_console(settings, offline=args.offline)
    App(settings, offline=args.offline).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
