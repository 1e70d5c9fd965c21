"""Per-entry and batch diffing of activity log entries.

``diff_entry`` never raises for bad entry data: malformed states and
entries without any state become EntryDiff outcomes, so one broken entry
cannot abort processing of the rest of a log list.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from recaudit.diff.differ import diff_snapshots
from recaudit.diff.errors import MalformedSnapshotError, MissingSnapshotsError
from recaudit.history.parsing import parse_state
from recaudit.models.entries import DiffStatus, EntryDiff, LogEntry
from recaudit.observability.logging import entry_context, get_logger
from recaudit.observability.metrics import entry_failures_total

_logger = get_logger("history.service")


def diff_entry(entry: LogEntry) -> EntryDiff:
    """Parse *entry*'s states and diff them under its category."""
    with entry_context(entry.id, entry.category):
        try:
            old_state = parse_state(entry.old_state, side="old")
            new_state = parse_state(entry.new_state, side="new")
            report = diff_snapshots(old_state, new_state, entry.category)
        except MalformedSnapshotError as exc:
            _logger.warning("malformed_snapshot", side=exc.side, error=str(exc))
            entry_failures_total.labels(status=DiffStatus.DETAILS_UNAVAILABLE.value).inc()
            return EntryDiff(entry_id=entry.id, status=DiffStatus.DETAILS_UNAVAILABLE, detail=str(exc))
        except MissingSnapshotsError as exc:
            _logger.info("entry_without_snapshots")
            entry_failures_total.labels(status=DiffStatus.MISSING_SNAPSHOTS.value).inc()
            return EntryDiff(entry_id=entry.id, status=DiffStatus.MISSING_SNAPSHOTS, detail=str(exc))

        _logger.debug(
            "entry_diffed",
            lifecycle=report.lifecycle.value,
            basic_changes=len(report.basic_changes),
            item_changes=sum(len(c) for c in report.collection_changes.values()),
        )
    return EntryDiff(entry_id=entry.id, status=DiffStatus.OK, report=report)


def diff_entries(entries: Iterable[LogEntry], workers: int = 1) -> list[EntryDiff]:
    """Diff every entry; results keep the input order.

    Entries are independent, so with ``workers > 1`` they are spread over a
    thread pool.
    """
    entries = list(entries)
    if workers <= 1 or len(entries) <= 1:
        return [diff_entry(e) for e in entries]
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="recaudit-diff") as pool:
        return list(pool.map(diff_entry, entries))
