"""Pydantic request/response schemas for the RecAudit REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from recaudit.models.entries import LogEntry

class LogEntryRequest(BaseModel):
    """One activity log entry.

    States are accepted as any JSON value so a malformed state becomes a
    per-entry outcome instead of rejecting the request.
    """

    id: int
    category: str
    old_state: Any = None
    new_state: Any = None
    timestamp: str = ""
    translation_key: str = ""
    parameters: Any = Field(default_factory=dict)

    def to_entry(self) -> LogEntry:
        return LogEntry(
            id=self.id,
            category=self.category,
            old_state=self.old_state,
            new_state=self.new_state,
            timestamp=self.timestamp,
            translation_key=self.translation_key,
            parameters=self.parameters,
        )


class BatchDiffRequest(BaseModel):
    """Body of POST /diff/batch."""

    entries: list[LogEntryRequest]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every 4xx/5xx response."""

    error: str
    detail: str
