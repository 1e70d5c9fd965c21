"""Parsing of snapshot payloads stored by the activity log.

The log store persists states as JSON text.  Parse failures raise
MalformedSnapshotError so the caller can flag one entry instead of failing
a whole batch.  NaN and infinities are not JSON and are rejected whether
they arrive as text tokens or as floats inside an already-decoded mapping.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from recaudit.diff.errors import MalformedSnapshotError
from recaudit.models.changes import Snapshot


class _NonFiniteNumber(ValueError):
    pass


def _reject_constant(token: str) -> float:
    raise _NonFiniteNumber(token)


def _find_non_finite(value: Any, path: str) -> str | None:
    """Return the path of the first NaN/infinite float in *value*, if any."""
    if isinstance(value, float):
        return None if math.isfinite(value) else path
    if isinstance(value, Mapping):
        for key, child in value.items():
            found = _find_non_finite(child, f"{path}.{key}" if path else str(key))
            if found is not None:
                return found
    elif isinstance(value, list | tuple):
        for index, child in enumerate(value):
            found = _find_non_finite(child, f"{path}[{index}]")
            if found is not None:
                return found
    return None


def _check_finite(state: Snapshot, side: str) -> Snapshot:
    path = _find_non_finite(state, "")
    if path is not None:
        raise MalformedSnapshotError(f"non-finite number at {path}", side=side)
    return state


def parse_state(raw: Any, side: str = "") -> Snapshot | None:
    """Return the snapshot held in *raw*, or None when no state was recorded.

    Empty or whitespace-only text counts as no state.  Anything that is not
    a mapping, JSON object text, or None is malformed.
    """
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return _check_finite(dict(raw), side)
    if not isinstance(raw, str):
        raise MalformedSnapshotError(f"unsupported payload type {type(raw).__name__}", side=side)
    if not raw.strip():
        return None
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except _NonFiniteNumber as exc:
        raise MalformedSnapshotError(f"non-finite number {exc}", side=side) from exc
    except json.JSONDecodeError as exc:
        raise MalformedSnapshotError(f"invalid JSON at line {exc.lineno} column {exc.colno}", side=side) from exc
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedSnapshotError(f"expected a JSON object, got {type(value).__name__}", side=side)
    # Overflowing literals such as 1e999 decode to inf without a constant token.
    return _check_finite(value, side)
