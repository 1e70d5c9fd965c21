"""History boundary: turns activity log entries into diff outcomes.

Submodules:
    parsing  -- JSON-text snapshot parsing.
    service  -- diff_entry / diff_entries with per-entry failure recovery.
"""

from recaudit.history.parsing import parse_state
from recaudit.history.service import diff_entries, diff_entry

__all__ = ["diff_entries", "diff_entry", "parse_state"]
