"""Per-category diff profiles.

A profile declares which top-level fields of a category's snapshots are
keyed collections.  Every other field is diffed as a scalar.  Supporting a
new category means adding a Category member and a profile entry here;
nothing else dispatches on category.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from recaudit.models.entries import Category
from recaudit.observability.logging import get_logger

_logger = get_logger("diff.profiles")


@dataclass(frozen=True)
class CollectionSpec:
    """A collection field reconciled item-by-item on ``key_field``."""

    field_name: str
    key_field: str
    label_field: str | None = None


@dataclass(frozen=True)
class DiffProfile:
    """Static diff descriptor for one category."""

    category: str
    collections: tuple[CollectionSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [spec.field_name for spec in self.collections]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Profile {self.category!r} declares collection fields more than once: {duplicates}")

    @property
    def collection_fields(self) -> tuple[str, ...]:
        return tuple(spec.field_name for spec in self.collections)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "collections": [
                {"field_name": s.field_name, "key_field": s.key_field, "label_field": s.label_field}
                for s in self.collections
            ],
        }


_VERSEMENTS = CollectionSpec("versements", key_field="number")

PROFILES: Mapping[Category, DiffProfile] = MappingProxyType(
    {
        Category.PRODUCT: DiffProfile(
            Category.PRODUCT,
            (CollectionSpec("recipe", key_field="raw_material_id", label_field="raw_material_name"),),
        ),
        Category.RAW_MATERIAL: DiffProfile(Category.RAW_MATERIAL),
        Category.VENDOR: DiffProfile(Category.VENDOR),
        Category.CLIENT: DiffProfile(Category.CLIENT),
        Category.SALE: DiffProfile(
            Category.SALE,
            (CollectionSpec("items", key_field="product_id", label_field="product_name"), _VERSEMENTS),
        ),
        # Purchases buy raw materials, so line items are keyed on raw_material_id.
        # Older logs wrote purchase items with product_id only; those items carry
        # no key here and collapse into a single absent-key entry when diffed.
        Category.PURCHASE: DiffProfile(
            Category.PURCHASE,
            (CollectionSpec("items", key_field="raw_material_id", label_field="name"), _VERSEMENTS),
        ),
        Category.TREASURY: DiffProfile(Category.TREASURY),
    }
)

_missing = [c.value for c in Category if c not in PROFILES]
if _missing:
    raise RuntimeError(f"Categories without a diff profile: {_missing}")


def scalar_profile(category: str) -> DiffProfile:
    """Profile that treats every top-level field as a scalar."""
    return DiffProfile(category)


def profile_for(category: Category | str) -> DiffProfile:
    """Return the diff profile for *category*.

    Unknown categories fall back to an all-scalar profile and are logged,
    never rejected.
    """
    try:
        return PROFILES[Category(category)]
    except ValueError:
        _logger.warning("unknown_category", category=str(category))
        return scalar_profile(str(category))
