"""Change report data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# Structured values are plain JSON-shaped Python objects:
# None, bool, int, float, str, list, dict[str, ...].
StructuredValue = Any
Snapshot = dict[str, Any]


class Comparison(StrEnum):
    """Outcome of comparing two optional structured values."""

    EQUAL = "equal"
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"

    def as_change_kind(self) -> ChangeKind | None:
        """Return the matching ChangeKind, or None for EQUAL."""
        if self is Comparison.EQUAL:
            return None
        return ChangeKind(self.value)


class ChangeKind(StrEnum):
    """Kind of a reported change."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class Lifecycle(StrEnum):
    """Whether a log entry represents a record creation, update, or deletion."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class FieldChange:
    """A single top-level field that differs between two snapshots.

    ADDED implies ``old_value`` is absent, REMOVED implies ``new_value`` is
    absent.  Absent values are stored as None; ``kind`` disambiguates them
    from a present null.
    """

    key: str
    kind: ChangeKind
    old_value: StructuredValue = None
    new_value: StructuredValue = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"key": self.key, "kind": self.kind.value}
        if self.kind is not ChangeKind.ADDED:
            out["old_value"] = self.old_value
        if self.kind is not ChangeKind.REMOVED:
            out["new_value"] = self.new_value
        return out


@dataclass(frozen=True)
class ItemChange:
    """A change to one keyed item of a collection field.

    ``item`` is the new item for ADDED and MODIFIED and the old item for
    REMOVED.  ``old_item``/``new_item`` are populated only for MODIFIED, and
    ``field_changes`` then lists the item fields that differ.
    """

    item: StructuredValue
    kind: ChangeKind
    key: StructuredValue = None
    label: StructuredValue = None
    old_item: StructuredValue = None
    new_item: StructuredValue = None
    field_changes: tuple[FieldChange, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "kind": self.kind.value,
            "key": self.key,
            "label": self.label,
            "item": self.item,
        }
        if self.kind is ChangeKind.MODIFIED:
            out["old_item"] = self.old_item
            out["new_item"] = self.new_item
        out["field_changes"] = [fc.to_dict() for fc in self.field_changes]
        return out


@dataclass(frozen=True)
class ChangeReport:
    """Structured description of what changed between two snapshots.

    Contract between the Snapshot Differ and the presentation layer.
    ``collection_changes`` holds one entry per collection field of the
    category's diff profile, in profile order, even when the list is empty.
    """

    category: str
    lifecycle: Lifecycle
    basic_changes: list[FieldChange] = field(default_factory=list)
    collection_changes: dict[str, list[ItemChange]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when neither a field nor an item changed."""
        return not self.basic_changes and not any(self.collection_changes.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "lifecycle": self.lifecycle.value,
            "basic_changes": [fc.to_dict() for fc in self.basic_changes],
            "collection_changes": {
                name: [ic.to_dict() for ic in changes] for name, changes in self.collection_changes.items()
            },
        }
