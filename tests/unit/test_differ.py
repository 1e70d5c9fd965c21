"""Tests for the Snapshot Differ.

Covers lifecycle resolution, profile-driven partitioning into basic and
collection changes, failure modes, and the determinism properties a review
UI relies on when it re-expands the same entry.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from recaudit.diff.differ import diff_snapshots
from recaudit.diff.errors import DiffError, MalformedSnapshotError, MissingSnapshotsError
from recaudit.models.changes import ChangeKind, FieldChange, Lifecycle
from recaudit.models.entries import Category

# ---------------------------------------------------------------------------
# Scenario tests
# ---------------------------------------------------------------------------


class TestProductRecipeUpdate:
    def test_recipe_modified_and_added(self) -> None:
        old = {"name": "Bolt", "recipe": [{"raw_material_id": 1, "quantity": 2}]}
        new = {
            "name": "Bolt",
            "recipe": [{"raw_material_id": 1, "quantity": 5}, {"raw_material_id": 2, "quantity": 1}],
        }

        report = diff_snapshots(old, new, Category.PRODUCT)

        assert report.lifecycle is Lifecycle.UPDATE
        assert report.basic_changes == []
        recipe = report.collection_changes["recipe"]
        assert [(c.kind, c.key) for c in recipe] == [(ChangeKind.MODIFIED, 1), (ChangeKind.ADDED, 2)]
        assert recipe[0].old_item["quantity"] == 2
        assert recipe[0].new_item["quantity"] == 5
        assert recipe[0].field_changes == (
            FieldChange(key="quantity", kind=ChangeKind.MODIFIED, old_value=2, new_value=5),
        )


class TestSaleDeletion:
    def test_everything_removed(self) -> None:
        old = {"client_id": 7, "total": 150, "items": [{"product_id": 3, "quantity": 2, "unit_price": 10}]}

        report = diff_snapshots(old, None, "sale")

        assert report.lifecycle is Lifecycle.DELETE
        assert report.basic_changes == [
            FieldChange(key="client_id", kind=ChangeKind.REMOVED, old_value=7),
            FieldChange(key="total", kind=ChangeKind.REMOVED, old_value=150),
        ]
        items = report.collection_changes["items"]
        assert [(c.kind, c.key) for c in items] == [(ChangeKind.REMOVED, 3)]
        assert report.collection_changes["versements"] == []


class TestVendorRename:
    def test_only_name_reported(self) -> None:
        report = diff_snapshots(
            {"name": "Acme", "phone": "0551111111"},
            {"name": "Acme Corp", "phone": "0551111111"},
            Category.VENDOR,
        )

        assert report.basic_changes == [
            FieldChange(key="name", kind=ChangeKind.MODIFIED, old_value="Acme", new_value="Acme Corp"),
        ]
        assert report.collection_changes == {}


class TestIdenticalPurchase:
    def test_resubmission_yields_empty_report(self) -> None:
        purchase = {
            "vendor_id": 4,
            "code": 12,
            "total": 1200.5,
            "items": [{"raw_material_id": 9, "name": "Flour", "quantity": 100, "unit_price": 12.005}],
            "versements": [{"number": 1, "amount": 600, "date": "2025-01-02"}],
        }
        copy = {
            "versements": [{"date": "2025-01-02", "amount": 600.0, "number": 1}],
            "items": [{"unit_price": 12.005, "quantity": 100, "name": "Flour", "raw_material_id": 9}],
            "total": 1200.5,
            "code": 12,
            "vendor_id": 4,
        }

        report = diff_snapshots(purchase, copy, Category.PURCHASE)

        assert report.is_empty
        assert report.basic_changes == []
        assert report.collection_changes == {"items": [], "versements": []}

    def test_legacy_product_id_items_collapse_under_absent_key(self) -> None:
        old = {
            "items": [
                {"product_id": 1, "name": "Flour", "quantity": 1},
                {"product_id": 2, "name": "Salt", "quantity": 2},
            ]
        }
        new = {"items": [{"raw_material_id": 1, "name": "Flour", "quantity": 1}]}

        items = diff_snapshots(old, new, Category.PURCHASE).collection_changes["items"]

        assert [(c.kind, c.key, c.label) for c in items] == [
            (ChangeKind.REMOVED, None, "Salt"),
            (ChangeKind.ADDED, 1, "Flour"),
        ]


class TestUnknownCategory:
    def test_whole_record_scalar_diff(self) -> None:
        old = {"label": "x", "items": [{"id": 1}]}
        new = {"label": "y", "items": [{"id": 1}, {"id": 2}]}

        report = diff_snapshots(old, new, "Unknown")

        assert report.category == "Unknown"
        assert report.collection_changes == {}
        assert [c.key for c in report.basic_changes] == ["label", "items"]
        assert report.basic_changes[1].kind is ChangeKind.MODIFIED


# ---------------------------------------------------------------------------
# Lifecycle and collection extraction
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_create(self) -> None:
        new = {"name": "Bolt", "recipe": [{"raw_material_id": 1, "quantity": 2}]}

        report = diff_snapshots(None, new, Category.PRODUCT)

        assert report.lifecycle is Lifecycle.CREATE
        assert [c.kind for c in report.basic_changes] == [ChangeKind.ADDED]
        assert [c.kind for c in report.collection_changes["recipe"]] == [ChangeKind.ADDED]

    def test_update_of_empty_snapshots(self) -> None:
        report = diff_snapshots({}, {}, Category.CLIENT)
        assert report.lifecycle is Lifecycle.UPDATE
        assert report.is_empty

    def test_missing_both(self) -> None:
        with pytest.raises(MissingSnapshotsError):
            diff_snapshots(None, None, Category.SALE)

    def test_missing_both_is_a_diff_error(self) -> None:
        with pytest.raises(DiffError):
            diff_snapshots(category="sale")


class TestCollectionExtraction:
    def test_missing_collection_field_is_empty(self) -> None:
        report = diff_snapshots({"total": 1}, {"total": 1, "items": [{"product_id": 1}]}, "sale")

        assert [c.kind for c in report.collection_changes["items"]] == [ChangeKind.ADDED]
        assert report.basic_changes == []

    def test_null_collection_field_is_empty(self) -> None:
        report = diff_snapshots({"items": None}, {"items": []}, "sale")
        assert report.is_empty

    def test_non_list_collection_is_malformed(self) -> None:
        with pytest.raises(MalformedSnapshotError) as excinfo:
            diff_snapshots({"items": {"product_id": 1}}, None, "sale")
        assert excinfo.value.side == "old"

    def test_non_mapping_snapshot_is_malformed(self) -> None:
        with pytest.raises(MalformedSnapshotError):
            diff_snapshots(None, ["not", "a", "record"], "vendor")  # type: ignore[arg-type]

    def test_versements_keyed_by_number(self) -> None:
        old = {"versements": [{"number": 1, "amount": 100}, {"number": 2, "amount": 50}]}
        new = {"versements": [{"number": 2, "amount": 75}]}

        report = diff_snapshots(old, new, Category.SALE)

        versements = report.collection_changes["versements"]
        assert [(c.kind, c.key) for c in versements] == [(ChangeKind.REMOVED, 1), (ChangeKind.MODIFIED, 2)]
        assert versements[1].label is None


class TestReportSerialization:
    def test_to_dict(self) -> None:
        report = diff_snapshots(
            {"total": 10, "items": [{"product_id": 1, "product_name": "Nut", "quantity": 1}]},
            {"total": 12, "items": [{"product_id": 1, "product_name": "Nut", "quantity": 2}]},
            "sale",
        )

        out = report.to_dict()

        assert out["category"] == "sale"
        assert out["lifecycle"] == "update"
        assert out["basic_changes"] == [{"key": "total", "kind": "modified", "old_value": 10, "new_value": 12}]
        (item,) = out["collection_changes"]["items"]
        assert item["kind"] == "modified"
        assert item["key"] == 1
        assert item["label"] == "Nut"
        assert item["old_item"]["quantity"] == 1
        assert item["field_changes"] == [{"key": "quantity", "kind": "modified", "old_value": 1, "new_value": 2}]
        assert out["collection_changes"]["versements"] == []

    def test_added_item_has_no_old_or_new_item(self) -> None:
        report = diff_snapshots(None, {"items": [{"product_id": 1}]}, "sale")
        (item,) = report.to_dict()["collection_changes"]["items"]
        assert "old_item" not in item
        assert "new_item" not in item


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_scalars = st.none() | st.booleans() | st.integers(-1000, 1000) | st.text(max_size=8)
_values = st.recursive(
    _scalars,
    lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=4), children, max_size=3),
    max_leaves=8,
)
_line_items = st.lists(
    st.fixed_dictionaries(
        {"product_id": st.integers(0, 5), "quantity": st.integers(0, 3)},
        optional={"raw_material_id": st.integers(0, 5), "number": st.integers(0, 5)},
    ),
    max_size=5,
)
_snapshots = st.dictionaries(
    st.sampled_from(["name", "total", "client_id", "note", "date"]),
    _values,
    max_size=5,
).flatmap(
    lambda base: st.fixed_dictionaries(
        {},
        optional={"items": _line_items, "recipe": _line_items, "versements": _line_items},
    ).map(lambda collections: {**base, **collections})
)
_categories = st.sampled_from([c.value for c in Category] + ["Unknown"])


class TestDifferProperties:
    @given(old=_snapshots, new=_snapshots, category=_categories)
    @settings(max_examples=150)
    def test_idempotent(self, old: dict, new: dict, category: str) -> None:
        assert diff_snapshots(old, new, category) == diff_snapshots(old, new, category)

    @given(state=_snapshots, category=_categories)
    @settings(max_examples=150)
    def test_identity_yields_emptiness(self, state: dict, category: str) -> None:
        report = diff_snapshots(state, state, category)
        assert report.basic_changes == []
        assert all(changes == [] for changes in report.collection_changes.values())

    @given(state=_snapshots, category=_categories)
    @settings(max_examples=100)
    def test_create_is_all_added(self, state: dict, category: str) -> None:
        report = diff_snapshots(None, state, category)
        assert report.lifecycle is Lifecycle.CREATE
        assert all(c.kind is ChangeKind.ADDED for c in report.basic_changes)
        assert all(c.kind is ChangeKind.ADDED for items in report.collection_changes.values() for c in items)

    @given(state=_snapshots, category=_categories)
    @settings(max_examples=100)
    def test_delete_is_all_removed(self, state: dict, category: str) -> None:
        report = diff_snapshots(state, None, category)
        assert report.lifecycle is Lifecycle.DELETE
        assert all(c.kind is ChangeKind.REMOVED for c in report.basic_changes)
        assert all(c.kind is ChangeKind.REMOVED for items in report.collection_changes.values() for c in items)

    @given(old=_snapshots, new=_snapshots, category=st.sampled_from(["sale", "purchase"]))
    @settings(max_examples=100)
    def test_collection_fields_never_in_basic_changes(self, old: dict, new: dict, category: str) -> None:
        report = diff_snapshots(old, new, category)
        assert {c.key for c in report.basic_changes}.isdisjoint({"items", "versements"})
