from __future__ import annotations

from typing import Dict, Protocol

from .models import PostBatch


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class PostsPort(Protocol):
    """Read access to the remote posts collection."""

    def fetch_posts(self) -> PostBatch: ...


class StoragePort(Protocol):
    """Persistence for user preferences."""

    def save_user_prefs(self, prefs: Dict) -> None: ...
    def load_user_prefs(self) -> Dict: ...
