"""Prometheus metrics for the diff pipeline.

All metrics live in the default registry so ``/metrics`` on the REST API
exposes them without extra wiring.
"""

from __future__ import annotations

from prometheus_client import Counter

diffs_total = Counter(
    "recaudit_diffs_total",
    "Change reports produced, by category and lifecycle.",
    ["category", "lifecycle"],
)

entry_failures_total = Counter(
    "recaudit_entry_failures_total",
    "Log entries whose details could not be diffed, by outcome status.",
    ["status"],
)
