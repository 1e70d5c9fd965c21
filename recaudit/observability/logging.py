"""Structured logging for RecAudit.

Everything goes to stderr so the CLI can keep stdout for its JSON result.
Per-entry context (entry id, category) is carried in structlog contextvars
while an entry is being diffed, so every event logged underneath it, in
the diff core included, is tagged without passing ids around.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager

import structlog

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": lambda: structlog.dev.ConsoleRenderer(colors=False),
}


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Configure structlog at *level*, rendering as ``json`` or ``console``."""
    try:
        renderer = _RENDERERS[fmt]()
    except KeyError:
        raise ValueError(f"Unknown log format: {fmt}") from None

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def entry_context(entry_id: int, category: str) -> AbstractContextManager[None]:
    """Bind *entry_id* and *category* to all log events inside the block."""
    return structlog.contextvars.bound_contextvars(entry_id=entry_id, category=category)


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a ``recaudit.<component>`` name."""
    return structlog.get_logger(component=f"recaudit.{component}")  # type: ignore[return-value]
