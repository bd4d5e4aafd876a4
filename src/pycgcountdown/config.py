"""Widget configuration for pycgcountdown."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycgcountdown._constants import DEFAULT_DURATION, DEFAULT_INTERVAL_MS, DEFAULT_PREVIEW_DELAY
from pycgcountdown.exceptions import CountdownConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise CountdownConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CountdownConfig:
    """Widget configuration.

    Parameters
    ----------
    interval_ms : int
        Time between timer ticks in milliseconds.
    show_minutes : bool
        Whether the default formatter shows minutes. A duration spec
        with a minutes segment forces them on for that run.
    show_hours : bool
        Whether the default formatter shows hours. A duration spec with
        an hours segment forces them on for that run.
    default_duration : str
        Duration spec used before the host sends one, and by preview mode.
    hide_on_complete : bool
        Initial hide-on-complete policy; the host may override it via
        ``f1``/``hideOnEnd``.
    preview : bool
        Run outside the host: after ``preview_delay`` seconds, push the
        default duration and start playing.
    preview_delay : float
        Seconds to wait before preview mode kicks in.
    """

    interval_ms: int = DEFAULT_INTERVAL_MS
    show_minutes: bool = True
    show_hours: bool = False
    default_duration: str = DEFAULT_DURATION
    hide_on_complete: bool = True
    preview: bool = False
    preview_delay: float = DEFAULT_PREVIEW_DELAY

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise CountdownConfigError(f"interval_ms must be positive, got {self.interval_ms}")
        if self.preview_delay < 0:
            raise CountdownConfigError(f"preview_delay must not be negative, got {self.preview_delay}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CountdownConfig:
        """Create configuration from ``CGCOUNTDOWN_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CountdownConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        duration_env = env.get("CGCOUNTDOWN_DEFAULT_DURATION")
        if duration_env is not None:
            config_kwargs["default_duration"] = duration_env.strip()

        interval_env = env.get("CGCOUNTDOWN_INTERVAL_MS")
        if interval_env is not None and "interval_ms" not in overrides:
            config_kwargs["interval_ms"] = _env_number("CGCOUNTDOWN_INTERVAL_MS", interval_env, int)

        delay_env = env.get("CGCOUNTDOWN_PREVIEW_DELAY")
        if delay_env is not None and "preview_delay" not in overrides:
            config_kwargs["preview_delay"] = _env_number("CGCOUNTDOWN_PREVIEW_DELAY", delay_env, float)

        _ENV_BOOL_MAP = {
            "CGCOUNTDOWN_SHOW_MINUTES": ("show_minutes", True),
            "CGCOUNTDOWN_SHOW_HOURS": ("show_hours", False),
            "CGCOUNTDOWN_HIDE_ON_COMPLETE": ("hide_on_complete", True),
            "CGCOUNTDOWN_PREVIEW": ("preview", False),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
