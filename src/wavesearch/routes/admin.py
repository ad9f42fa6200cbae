"""Admin endpoints for index maintenance."""

import asyncio

import structlog
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from wavesearch.lifecycle import SearchRuntime
from wavesearch.search.errors import RebuildInProgressError
from wavesearch.search.schemas import RebuildReport

logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin"])


class ReindexWaveResponse(BaseModel):
    """Response after scheduling a single wave for reindexing."""

    wave_id: str
    scheduled: bool


@router.post("/reindex", response_model=RebuildReport)
async def rebuild_index(request: Request) -> RebuildReport:
    """Delete the whole index and reindex every wavelet.

    Returns 409 while another rebuild is running.
    """
    runtime: SearchRuntime = request.app.state.runtime
    try:
        return await asyncio.to_thread(runtime.rebuilder.rebuild)
    except RebuildInProgressError as e:
        logger.warning("index_rebuild_rejected")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post(
    "/reindex/{wave_id:path}",
    response_model=ReindexWaveResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reindex_wave(wave_id: str, request: Request) -> ReindexWaveResponse:
    """Schedule every wavelet of one wave for reindexing."""
    runtime: SearchRuntime = request.app.state.runtime
    if not list(runtime.store.wavelet_ids(wave_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown wave")
    runtime.indexer.reindex_wave(wave_id)
    return ReindexWaveResponse(wave_id=wave_id, scheduled=True)
