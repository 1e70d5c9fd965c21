"""Diff core for RecAudit.

Pure, synchronous functions with no I/O; safe to call concurrently.

Submodules:
    compare    -- Structural equality and top-level field diffs.
    reconcile  -- Key-based reconciliation of item collections.
    profiles   -- Static per-category table of collection fields.
    differ     -- Orchestrator producing a ChangeReport.
    errors     -- DiffError hierarchy.
"""

from recaudit.diff.compare import MISSING, compare, diff_fields, values_equal
from recaudit.diff.differ import diff_snapshots
from recaudit.diff.errors import DiffError, MalformedSnapshotError, MissingSnapshotsError
from recaudit.diff.profiles import PROFILES, CollectionSpec, DiffProfile, profile_for
from recaudit.diff.reconcile import reconcile

__all__ = [
    "MISSING",
    "PROFILES",
    "CollectionSpec",
    "DiffError",
    "DiffProfile",
    "MalformedSnapshotError",
    "MissingSnapshotsError",
    "compare",
    "diff_fields",
    "diff_snapshots",
    "profile_for",
    "reconcile",
    "values_equal",
]
