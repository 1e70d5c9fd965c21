"""REST API layer for RecAudit.

Exposes:
    create_app -- FastAPI application factory.
"""

from recaudit.api.app import create_app

__all__ = ["create_app"]
