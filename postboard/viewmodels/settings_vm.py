from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..adapters.posts_rest import DEFAULT_POSTS_URL
from ..utils.logging import env_forces_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    posts_url: str = DEFAULT_POSTS_URL
    request_timeout_s: int = 10
    dispatch_interval_ms: int = 50
    debug_logging: bool = False


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig(debug_logging=env_forces_debug())
        self.on_save = on_save

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def posts_url(self) -> str:
        return self.config.posts_url

    @posts_url.setter
    def posts_url(self, value: str) -> None:
        self.config = replace(self.config, posts_url=self._coerce_url(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        coerced = self._coerce_int("request_timeout_s", value, minimum=1)
        self.config = replace(self.config, request_timeout_s=coerced)

    @property
    def dispatch_interval_ms(self) -> int:
        return self.config.dispatch_interval_ms

    @property
    def debug_logging(self) -> bool:
        return self.config.debug_logging

    @debug_logging.setter
    def debug_logging(self, value: bool) -> None:
        self.config = replace(self.config, debug_logging=self._coerce_bool(value))

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = set(SettingsConfig.__annotations__.keys())
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

    def to_dict(self) -> dict:
        return asdict(self.config)

    def cmd_save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "posts_url":
            return self._coerce_url(raw)
        if key == "request_timeout_s":
            return self._coerce_int(key, raw, minimum=1)
        if key == "dispatch_interval_ms":
            return self._coerce_int(key, raw, minimum=1)
        if key == "debug_logging":
            return self._coerce_bool(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("posts_url must be a non-empty string.")
        text = value.strip()
        if not text.startswith(("http://", "https://")):
            raise ValueError("posts_url must start with http:// or https://.")
        return text

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: Optional[int] = None) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if minimum is not None and coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced

