"""Snapshot Differ: turns an old/new snapshot pair into a ChangeReport.

Collection fields named by the category's profile are reconciled item by
item; every other top-level field is compared as a whole value.  Creation
and deletion go through the same path, so they yield all-ADDED or
all-REMOVED reports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from recaudit.diff.compare import diff_fields
from recaudit.diff.errors import MalformedSnapshotError, MissingSnapshotsError
from recaudit.diff.profiles import profile_for
from recaudit.diff.reconcile import reconcile
from recaudit.models.changes import ChangeReport, ItemChange, Lifecycle
from recaudit.models.entries import Category
from recaudit.observability.metrics import diffs_total


def _lifecycle(old_state: Mapping[str, Any] | None, new_state: Mapping[str, Any] | None) -> Lifecycle:
    if old_state is None:
        return Lifecycle.CREATE
    if new_state is None:
        return Lifecycle.DELETE
    return Lifecycle.UPDATE


def _check_snapshot(state: Any, side: str) -> None:
    if state is not None and not isinstance(state, Mapping):
        raise MalformedSnapshotError(f"expected a mapping, got {type(state).__name__}", side=side)


def _collection(state: Mapping[str, Any] | None, field_name: str, side: str) -> Sequence[Any]:
    if state is None:
        return []
    value = state.get(field_name)
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        raise MalformedSnapshotError(
            f"collection field {field_name!r} holds {type(value).__name__}, expected a list",
            side=side,
        )
    return value


def diff_snapshots(
    old_state: Mapping[str, Any] | None = None,
    new_state: Mapping[str, Any] | None = None,
    category: Category | str = "",
) -> ChangeReport:
    """Diff two snapshots of one record under *category*'s profile.

    Raises:
        MissingSnapshotsError:  both states are None.
        MalformedSnapshotError: a state is not a mapping, or a collection
                                field holds something other than a list.
    """
    if old_state is None and new_state is None:
        raise MissingSnapshotsError()
    _check_snapshot(old_state, "old")
    _check_snapshot(new_state, "new")

    lifecycle = _lifecycle(old_state, new_state)
    profile = profile_for(category)

    collection_changes: dict[str, list[ItemChange]] = {}
    for spec in profile.collections:
        collection_changes[spec.field_name] = reconcile(
            _collection(old_state, spec.field_name, "old"),
            _collection(new_state, spec.field_name, "new"),
            spec.key_field,
            spec.label_field,
        )

    basic_changes = diff_fields(old_state, new_state, exclude_keys=profile.collection_fields)

    metric_category = profile.category if isinstance(profile.category, Category) else "unknown"
    diffs_total.labels(category=metric_category, lifecycle=lifecycle.value).inc()
    return ChangeReport(
        category=str(profile.category),
        lifecycle=lifecycle,
        basic_changes=basic_changes,
        collection_changes=collection_changes,
    )
