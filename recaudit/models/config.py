"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("json", "console")


@dataclass
class DiffConfig:
    """Log entry diffing configuration."""

    workers: int = 1  # thread pool size for batch diffing; 1 means sequential
    max_batch: int = 1000  # largest entry list accepted by POST /diff/batch


@dataclass
class APIConfig:
    """REST API configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class RecAuditConfig:
    """Top-level RecAudit configuration."""

    diff: DiffConfig = field(default_factory=DiffConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)
