"""Keyed collection reconciliation.

Collections such as a sale's line items are matched by a stable key field
rather than by position, so reordering a list never reports a change and
editing one line reports exactly one MODIFIED item.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from typing import Any

from recaudit.diff.compare import MISSING, diff_fields, values_equal
from recaudit.models.changes import ChangeKind, FieldChange, ItemChange, StructuredValue


def _freeze(value: StructuredValue) -> Hashable:
    """Turn a key-field value into a hashable token with structural equality."""
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, Mapping):
        return ("map", frozenset((k, _freeze(v)) for k, v in value.items()))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return ("list", tuple(_freeze(v) for v in value))
    return value


def _key_of(item: StructuredValue, key_field: str) -> Hashable:
    if not isinstance(item, Mapping) or key_field not in item:
        return MISSING
    return _freeze(item[key_field])


def _index(items: Sequence[StructuredValue] | None, key_field: str) -> dict[Hashable, StructuredValue]:
    # A later duplicate replaces the item but keeps the key's first position.
    index: dict[Hashable, StructuredValue] = {}
    for item in items or ():
        index[_key_of(item, key_field)] = item
    return index


def _field(item: StructuredValue, name: str | None) -> Any:
    if name is None or not isinstance(item, Mapping):
        return None
    return item.get(name)


def reconcile(
    old_items: Sequence[StructuredValue] | None,
    new_items: Sequence[StructuredValue] | None,
    key_field: str,
    label_field: str | None = None,
) -> list[ItemChange]:
    """Match items by *key_field* and report only the ones that changed.

    Output order: REMOVED items in old-list order, then ADDED and MODIFIED
    items in new-list order.
    """
    old_index = _index(old_items, key_field)
    new_index = _index(new_items, key_field)
    changes: list[ItemChange] = []

    for key, old_item in old_index.items():
        if key not in new_index:
            changes.append(
                ItemChange(
                    item=old_item,
                    kind=ChangeKind.REMOVED,
                    key=_field(old_item, key_field),
                    label=_field(old_item, label_field),
                )
            )

    for key, new_item in new_index.items():
        if key not in old_index:
            changes.append(
                ItemChange(
                    item=new_item,
                    kind=ChangeKind.ADDED,
                    key=_field(new_item, key_field),
                    label=_field(new_item, label_field),
                )
            )
            continue
        old_item = old_index[key]
        if values_equal(old_item, new_item):
            continue
        field_changes: tuple[FieldChange, ...] = ()
        if isinstance(old_item, Mapping) and isinstance(new_item, Mapping):
            field_changes = tuple(diff_fields(old_item, new_item))
        changes.append(
            ItemChange(
                item=new_item,
                kind=ChangeKind.MODIFIED,
                key=_field(new_item, key_field),
                label=_field(new_item, label_field),
                old_item=old_item,
                new_item=new_item,
                field_changes=field_changes,
            )
        )

    return changes
