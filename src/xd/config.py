"""Environment-driven editor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "XD_"
RC_FILENAME = ".xdrc"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_seconds(environ: Mapping[str, str], name: str) -> Optional[float]:
    raw = _env(environ, name)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


@dataclass(slots=True)
class EditorConfig:
    """Settings shared by the driver and the plugin layer.

    ``plugin_timeout`` of ``None`` keeps the blocking wait for a plugin's
    sentinel; a number bounds every plugin transaction.
    """

    rc_path: Optional[Path] = None
    plugin_timeout: Optional[float] = None
    reap_timeout: float = 1.0
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        rc_override = _env(env, "RC")
        if rc_override is not None:
            rc_path: Optional[Path] = Path(rc_override).expanduser()
        else:
            home = env.get("HOME")
            rc_path = Path(home) / RC_FILENAME if home else None
        return cls(
            rc_path=rc_path,
            plugin_timeout=_env_seconds(env, "PLUGIN_TIMEOUT"),
            reap_timeout=_env_seconds(env, "REAP_TIMEOUT") or 1.0,
            encoding=_env(env, "ENCODING") or "utf-8",
        )


__all__ = ["EditorConfig", "RC_FILENAME"]
