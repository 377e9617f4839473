"""Liveness and readiness probes."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str


class ReadinessResponse(BaseModel):
    status: str
    database: str
    storage_backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Answers as long as the process is serving requests."""
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse, responses={503: {"model": ReadinessResponse}})
async def readiness_check():
    """
    Probe the configured store with one read of the default lists.

    Any failure, a missing Supabase configuration included, answers 503.
    """
    container = get_container()
    backend = "memory" if container.uses_memory else "supabase"
    try:
        await container.mailing_lists.list_default_lists()
    except Exception:
        logger.exception("Readiness probe failed against %s storage", backend)
        body = ReadinessResponse(status="not_ready", database="unavailable", storage_backend=backend)
        return JSONResponse(status_code=503, content=body.model_dump())

    return ReadinessResponse(status="ready", database="connected", storage_backend=backend)
