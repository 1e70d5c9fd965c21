"""Entry point for `python -m recaudit`.

Usage:
    python -m recaudit diff entries.json
    python -m recaudit serve
"""

from __future__ import annotations

from recaudit.cli import cli

cli(prog_name="recaudit")
