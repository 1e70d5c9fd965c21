"""Structural value comparison.

Values are JSON-shaped: None, bool, int, float, str, lists and string-keyed
mappings.  Equality is structural: mappings compare by key set regardless
of insertion order, sequences by length and position, numbers by value
(``1 == 1.0``).  Booleans are never equal to numbers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Final

from recaudit.models.changes import Comparison, FieldChange, StructuredValue


class _Missing:
    """Sentinel type for an absent value (distinct from a present null)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def values_equal(a: StructuredValue, b: StructuredValue) -> bool:
    """Return True if *a* and *b* are recursively identical."""
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_number(a) or _is_number(b):
        return _is_number(a) and _is_number(b) and a == b
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
            return False
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    if _is_sequence(a) or _is_sequence(b):
        if not (_is_sequence(a) and _is_sequence(b)):
            return False
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b, strict=True))
    return type(a) is type(b) and a == b


def compare(old: StructuredValue = MISSING, new: StructuredValue = MISSING) -> Comparison:
    """Classify the change from *old* to *new*; either may be ``MISSING``."""
    if old is MISSING and new is MISSING:
        return Comparison.EQUAL
    if old is MISSING:
        return Comparison.ADDED
    if new is MISSING:
        return Comparison.REMOVED
    return Comparison.EQUAL if values_equal(old, new) else Comparison.MODIFIED


def diff_fields(
    old_obj: Mapping[str, Any] | None,
    new_obj: Mapping[str, Any] | None,
    exclude_keys: Iterable[str] = (),
) -> list[FieldChange]:
    """Return one FieldChange per top-level key whose value differs.

    Keys are visited in first-seen order: keys of *old_obj* first, then keys
    only present in *new_obj*.  Nested values are compared as opaque wholes.
    """
    old_obj = old_obj or {}
    new_obj = new_obj or {}
    excluded = set(exclude_keys)

    keys: dict[str, None] = dict.fromkeys(k for k in old_obj if k not in excluded)
    keys.update(dict.fromkeys(k for k in new_obj if k not in excluded and k not in keys))

    changes: list[FieldChange] = []
    for key in keys:
        old_value = old_obj.get(key, MISSING)
        new_value = new_obj.get(key, MISSING)
        kind = compare(old_value, new_value).as_change_kind()
        if kind is None:
            continue
        changes.append(
            FieldChange(
                key=key,
                kind=kind,
                old_value=None if old_value is MISSING else old_value,
                new_value=None if new_value is MISSING else new_value,
            )
        )
    return changes
