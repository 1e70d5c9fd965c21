"""Shared fixtures for RecAudit integration tests.

Provides a realistic activity log (the shape the log store delivers, with
states as JSON text) and clients for the REST API and CLI, so tests can
exercise the full parse → diff → serialize pipeline.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from fastapi.testclient import TestClient

from recaudit.api.app import create_app
from recaudit.models.config import DiffConfig, RecAuditConfig

# ---------------------------------------------------------------------------
# Entry factory helpers
# ---------------------------------------------------------------------------


def make_entry(
    entry_id: int,
    category: str,
    old_state: dict[str, Any] | None = None,
    new_state: dict[str, Any] | None = None,
    translation_key: str = "",
) -> dict[str, Any]:
    """Build a log entry dict with states encoded as JSON text."""
    return {
        "id": entry_id,
        "category": category,
        "old_state": json.dumps(old_state) if old_state is not None else None,
        "new_state": json.dumps(new_state) if new_state is not None else None,
        "timestamp": "2025-03-01T10:00:00Z",
        "translation_key": translation_key or f"history.{category}",
        "parameters": "{}",
    }


_SALE = {
    "client_id": 7,
    "total": 150,
    "items": [{"product_id": 3, "product_name": "Bolt", "quantity": 2, "unit_price": 10}],
    "versements": [{"number": 1, "amount": 100, "date": "2025-02-01"}],
}

_PURCHASE = {
    "vendor_id": 2,
    "total": 500,
    "items": [
        {"raw_material_id": 4, "name": "Steel", "quantity": 10, "unit_price": 40},
        {"raw_material_id": 5, "name": "Zinc", "quantity": 5, "unit_price": 20},
    ],
    "versements": [{"number": 1, "amount": 250, "date": "2025-02-03"}],
}


@pytest.fixture
def activity_log() -> list[dict[str, Any]]:
    """One entry per interesting case, in log order."""
    return [
        make_entry(
            1,
            "product",
            old_state={"name": "Bolt", "recipe": [{"raw_material_id": 1, "raw_material_name": "Steel", "quantity": 2}]},
            new_state={
                "name": "Bolt",
                "recipe": [
                    {"raw_material_id": 1, "raw_material_name": "Steel", "quantity": 5},
                    {"raw_material_id": 2, "raw_material_name": "Zinc", "quantity": 1},
                ],
            },
        ),
        make_entry(2, "sale", old_state=_SALE),
        make_entry(3, "vendor", old_state={"name": "Acme"}, new_state={"name": "Acme Corp"}),
        make_entry(4, "purchase", old_state=_PURCHASE, new_state=_PURCHASE),
        make_entry(5, "Unknown", old_state={"a": 1}, new_state={"a": 2}),
        {**make_entry(6, "client"), "old_state": "{broken", "new_state": '{"name": "x"}'},
        make_entry(7, "treasury"),
    ]


@pytest.fixture
def api_client() -> TestClient:
    app = create_app(config=RecAuditConfig(diff=DiffConfig(workers=2)))
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def cli_runner(monkeypatch: pytest.MonkeyPatch) -> Iterator[CliRunner]:
    """CliRunner with log output discarded so stdout holds only the JSON result."""

    def _quiet_logging(*_args: Any, **_kwargs: Any) -> None:
        structlog.configure(logger_factory=structlog.ReturnLoggerFactory())

    monkeypatch.setattr("recaudit.cli.main.setup_logging", _quiet_logging)
    yield CliRunner()
    structlog.reset_defaults()
