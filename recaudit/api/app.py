"""FastAPI application factory for RecAudit.

Usage::

    from recaudit.api.app import create_app

    app = create_app(config=config)

The factory is used by ``recaudit serve`` and by the tests.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from recaudit.api.routes import router
from recaudit.api.schemas import ErrorResponse

_log = structlog.get_logger(component="recaudit.api.app")

_API_PREFIX = "/api/v1"


def create_app(config: Any = None) -> FastAPI:
    """Create and configure the RecAudit FastAPI application.

    Args:
        config: RecAuditConfig.  Supplies the batch worker count; None means
                sequential batch diffing.

    Returns:
        Configured FastAPI application, ready to be served by uvicorn.
    """
    from recaudit import __version__

    app = FastAPI(
        title="RecAudit",
        summary="Business record change auditing API",
        version=__version__,
        description=(
            "RecAudit turns before/after snapshots of business records into "
            "structured field-level and item-level change reports."
        ),
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    app.state.config = config

    app.include_router(router, prefix=_API_PREFIX)
    app.mount("/metrics", make_asgi_app())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map Pydantic validation errors to our error envelope."""
        errors = exc.errors()
        detail = ""
        if errors:
            locs = errors[0].get("loc", ())
            where = ".".join(str(part) for part in locs[1:]) if len(locs) > 1 else ""
            msg = str(errors[0].get("msg", ""))
            detail = f"{where}: {msg}" if where else msg

        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="INVALID_LOG_ENTRY", detail=detail).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions; never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="INTERNAL_ERROR",
                detail="An unexpected error occurred.",
            ).model_dump(),
        )

    return app
