"""Activity log entry structures and enumerations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from recaudit.models.changes import ChangeReport


class Category(StrEnum):
    """Domain record category of an activity log entry."""

    PRODUCT = "product"
    RAW_MATERIAL = "raw_material"
    VENDOR = "vendor"
    CLIENT = "client"
    SALE = "sale"
    PURCHASE = "purchase"
    TREASURY = "treasury"


class DiffStatus(StrEnum):
    """Outcome of diffing a single log entry."""

    OK = "ok"
    DETAILS_UNAVAILABLE = "details_unavailable"
    MISSING_SNAPSHOTS = "missing_snapshots"


@dataclass(frozen=True)
class LogEntry:
    """One record mutation as delivered by the activity log store.

    ``old_state`` and ``new_state`` should be mappings or the raw JSON text the
    store persisted; the history boundary parses text and flags anything else
    as malformed before diffing.
    ``category`` is kept as text so unknown categories survive intake.
    """

    id: int
    category: str
    old_state: Any = None
    new_state: Any = None
    timestamp: str = ""  # ISO-8601
    translation_key: str = ""
    parameters: Any = field(default_factory=dict)


@dataclass
class EntryDiff:
    """Result of diffing one log entry.

    ``report`` is populated only when ``status`` is OK; otherwise ``detail``
    says why the entry's details are unavailable.
    """

    entry_id: int
    status: DiffStatus
    report: ChangeReport | None = None
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "status": self.status.value,
            "report": self.report.to_dict() if self.report is not None else None,
            "detail": self.detail,
        }
