"""RecAudit command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``recaudit`` script).
"""

from recaudit.cli.main import cli

__all__ = ["cli"]
