"""Full-text search API endpoint."""

import asyncio

from fastapi import APIRouter, Query, Request

from wavesearch.lifecycle import SearchRuntime
from wavesearch.search.schemas import SearchResponse

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Full-text search across a participant's waves",
    description=(
        "Supports in:<folder>, with:<participant> and creator:<participant> "
        "tokens; other words match blip text."
    ),
)
async def search(
    request: Request,
    user: str = Query(..., min_length=1, description="Searching participant address"),
    q: str = Query(default="", max_length=500, description="Search query string"),
    limit: int = Query(default=20, ge=1, le=100, description="Waves per page"),
    offset: int = Query(default=0, ge=0, description="Backend offset to start at"),
) -> SearchResponse:
    """Search the waves visible to a participant.

    A backend failure returns an empty response with ``failed`` set.
    """
    runtime: SearchRuntime = request.app.state.runtime
    return await asyncio.to_thread(runtime.search.search, user, q, offset, limit)
