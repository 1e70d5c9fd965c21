"""RecAudit: structured change reports for business record history.

Given the before and after snapshots of a record mutation and the record's
category, RecAudit reports which fields changed and which collection items
were added, removed, or modified.
"""

from recaudit.diff import diff_snapshots
from recaudit.history import diff_entries, diff_entry

__version__ = "0.1.0"

__all__ = ["__version__", "diff_entries", "diff_entry", "diff_snapshots"]
