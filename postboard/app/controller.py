"""Adapter and use-case wiring for the desktop app runtime.

This module owns lazy construction of the posts adapter and the fetch
service from values in :class:`postboard.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..adapters.posts_mock import PostsMock
from ..adapters.posts_rest import PostsRestAdapter
from ..usecases.fetch_posts import FetchPostsService
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache the runtime adapter/service from settings state.

    Call chain:
        ``postboard.app.main.App`` creates one instance, calls
        ``ensure_ready`` and hands ``fetch_service`` to ``PostsVM``.
    """

    def __init__(self, settings_vm: SettingsVM, *, offline: bool = False) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings holding the posts URL and request timeout.
            offline: Use ``PostsMock`` instead of the REST adapter.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self.offline = offline
        self.posts_adapter: Optional[Union[PostsRestAdapter, PostsMock]] = None
        self.fetch_service: Optional[FetchPostsService] = None

    def ensure_ready(self) -> bool:
        """Ensure the adapter and fetch service exist.

        Returns:
            ``True`` once dependencies are available, ``False`` if the
            configured URL is rejected by the adapter.
        """
        if self.posts_adapter is not None and self.fetch_service is not None:
            return True
        if self.offline:
            self.posts_adapter = PostsMock()
            self._log.info("Using offline posts mock")
        else:
            try:
                self.posts_adapter = PostsRestAdapter(
                    self.settings_vm.posts_url,
                    request_timeout_s=self.settings_vm.request_timeout_s,
                )
            except ValueError as exc:
                self._log.error("Cannot build posts adapter: %s", exc)
                return False
            self._log.info("Posts endpoint: %s", self.settings_vm.posts_url)
        self.fetch_service = FetchPostsService(self.posts_adapter)
        return True

    def close(self) -> None:
        if self.fetch_service is not None:
            self.fetch_service.close()
        if self.posts_adapter is not None:
            self.posts_adapter.close()


__all__ = ["AppController"]
