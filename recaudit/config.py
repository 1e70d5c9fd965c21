"""Configuration loading from RECAUDIT_* environment variables.

Integers are clamped into their valid range; enumerated settings (log level,
log format) are validated and rejected with ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from recaudit.models.config import (
    LOG_FORMATS,
    LOG_LEVELS,
    APIConfig,
    DiffConfig,
    LogConfig,
    RecAuditConfig,
)

_PREFIX = "RECAUDIT_"


class _Env:
    """Typed reader over a RECAUDIT_-prefixed environment mapping."""

    def __init__(self, environ: Mapping[str, str]) -> None:
        self._environ = environ

    def text(self, key: str, default: str) -> str:
        return self._environ.get(_PREFIX + key, default)

    def integer(self, key: str, default: int, min_val: int, max_val: int) -> int:
        raw = self.text(key, "")
        try:
            val = int(raw) if raw.strip() else default
        except ValueError as exc:
            raise ValueError(f"Invalid {_PREFIX}{key}: {raw!r} is not an integer") from exc
        return min(max(val, min_val), max_val)

    def choice(self, key: str, default: str, choices: tuple[str, ...], label: str) -> str:
        val = self.text(key, default).strip().lower()
        if val not in choices:
            raise ValueError(f"Invalid {label}: {val}. Must be one of {', '.join(choices)}")
        return val


def load_config(environ: Mapping[str, str] | None = None) -> RecAuditConfig:
    """Build the configuration from *environ* (default: ``os.environ``)."""
    env = _Env(os.environ if environ is None else environ)
    return RecAuditConfig(
        diff=DiffConfig(
            workers=env.integer("DIFF_WORKERS", 1, min_val=1, max_val=32),
            max_batch=env.integer("DIFF_MAX_BATCH", 1000, min_val=1, max_val=100_000),
        ),
        api=APIConfig(
            host=env.text("API_HOST", "127.0.0.1"),
            port=env.integer("API_PORT", 8080, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=env.choice("LOG_LEVEL", "info", LOG_LEVELS, "log level"),
            format=env.choice("LOG_FORMAT", "json", LOG_FORMATS, "log format"),
        ),
    )
