"""Root logger setup for the posts app.

``POSTBOARD_LOG_LEVEL`` (a name such as ``warning`` or a number) wins over
everything else; a truthy ``POSTBOARD_DEBUG`` forces DEBUG when no level is
named. Stored settings only apply when neither variable is set.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(threadName)s %(name)s: %(message)s"
LEVEL_ENV = "POSTBOARD_LOG_LEVEL"
DEBUG_ENV = "POSTBOARD_DEBUG"

# urllib3 logs every connection at DEBUG; it never goes below INFO.
_CHATTY_LOGGERS = ("urllib3",)


def parse_level(value: Union[int, str, None], fallback: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        # isdigit() also accepts characters like "²" that int() rejects.
        try:
            return int(text)
        except ValueError:
            return fallback
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def _env_level() -> Optional[int]:
    named = os.getenv(LEVEL_ENV)
    if named and named.strip():
        return parse_level(named)
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def _set_level(level: int) -> int:
    logging.getLogger().setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    return level


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install a stderr handler once and set the root level.

    Returns the level actually applied.
    """
    env_level = _env_level()
    level = env_level if env_level is not None else parse_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    return _set_level(level)


def apply_preferences(debug_enabled: bool) -> int:
    """Apply the stored ``debug_logging`` setting unless the environment overrides it."""
    env_level = _env_level()
    if env_level is not None:
        return _set_level(env_level)
    return _set_level(logging.DEBUG if debug_enabled else logging.INFO)


def env_forces_debug() -> bool:
    env_level = _env_level()
    return env_level is not None and env_level <= logging.DEBUG
