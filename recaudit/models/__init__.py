"""Core data structures for RecAudit."""

from recaudit.models.changes import (
    ChangeKind,
    ChangeReport,
    Comparison,
    FieldChange,
    ItemChange,
    Lifecycle,
    Snapshot,
    StructuredValue,
)
from recaudit.models.config import RecAuditConfig
from recaudit.models.entries import Category, DiffStatus, EntryDiff, LogEntry

__all__ = [
    "Category",
    "ChangeKind",
    "ChangeReport",
    "Comparison",
    "DiffStatus",
    "EntryDiff",
    "FieldChange",
    "ItemChange",
    "Lifecycle",
    "LogEntry",
    "RecAuditConfig",
    "Snapshot",
    "StructuredValue",
]
