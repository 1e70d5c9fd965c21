"""Exceptions raised by the diff core."""

from __future__ import annotations


class DiffError(Exception):
    """Base class for failures that prevent producing a ChangeReport."""


class MalformedSnapshotError(DiffError):
    """A supplied state is not well-formed structured data."""

    def __init__(self, detail: str, side: str = "") -> None:
        prefix = f"{side} state: " if side else ""
        super().__init__(f"{prefix}{detail}")
        self.side = side
        self.detail = detail


class MissingSnapshotsError(DiffError):
    """Neither an old nor a new state was supplied."""

    def __init__(self) -> None:
        super().__init__("log entry carries neither an old nor a new state")
