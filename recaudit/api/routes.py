"""Route handlers for the RecAudit REST API.

Handlers are synchronous: diffing is CPU-bound and FastAPI runs sync
handlers in its threadpool.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from recaudit.api.schemas import BatchDiffRequest, ErrorResponse, HealthResponse, LogEntryRequest
from recaudit.diff.profiles import PROFILES
from recaudit.history.service import diff_entries, diff_entry
from recaudit.models.config import DiffConfig

router = APIRouter()


def _diff_config(request: Request) -> DiffConfig:
    config = request.app.state.config
    return config.diff if config is not None else DiffConfig()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    from recaudit import __version__

    return HealthResponse(version=__version__)


@router.get("/profiles")
def profiles() -> dict[str, Any]:
    return {"profiles": [profile.to_dict() for profile in PROFILES.values()]}


@router.post("/diff")
def diff_one(body: LogEntryRequest) -> dict[str, Any]:
    return diff_entry(body.to_entry()).to_dict()


@router.post("/diff/batch")
def diff_batch(body: BatchDiffRequest, request: Request) -> Any:
    settings = _diff_config(request)
    if len(body.entries) > settings.max_batch:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="BATCH_TOO_LARGE",
                detail=f"{len(body.entries)} entries exceed the limit of {settings.max_batch}",
            ).model_dump(),
        )
    results = diff_entries([e.to_entry() for e in body.entries], workers=settings.workers)
    return {"results": [r.to_dict() for r in results]}
